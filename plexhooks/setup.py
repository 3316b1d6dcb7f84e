import logging.config
import typing

from plexhooks.conf import ConfigLoader
from plexhooks.platform import WebhooksPlatform

__all__ = ["initialise"]


def initialise(
    config_file: typing.Optional[str] = None,
) -> typing.Tuple[ConfigLoader, WebhooksPlatform]:
    """
    Load settings, configure logging and build the platform.
    :param config_file: Optional path to a settings.py file.
    :return: The loaded configuration and the platform.
    """
    if config_file:
        config = ConfigLoader(config_file=config_file)
    else:
        config = ConfigLoader.get_lazily_loaded_config()

    logging.config.dictConfig(config.LOGGING_CONFIG)

    platform = WebhooksPlatform(config.platform_config())
    logging.getLogger(__name__).debug(f"Initialised {platform!r} from {config!r}")
    return config, platform
