import logging

from rich.logging import RichHandler

from reseptimasiina.config import Config, Env


def setup_logging(config: Config) -> None:
    if config.env == Env.local:
        handler: logging.Handler = RichHandler(rich_tracebacks=True)
        fmt = "%(message)s"
    else:
        handler = logging.StreamHandler()
        fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    logging.basicConfig(
        level=config.log_level.upper(),
        format=fmt,
        handlers=[handler],
        force=True,
    )
