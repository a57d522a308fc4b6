"""Describes the Reseptimasiina domain. Centres around the `RecipeMachine`.

What is in here?

- A large language model turns ingredients or a photo into a recipe.
  It is served behind an api and answers with (hopefully) JSON.
- The answer is parsed, saved to a single sqlite table and rendered as HTML.
- No invariants beyond "don't crash on a bad answer".

The model api and the database are both passed in, so both can be faked.
"""
