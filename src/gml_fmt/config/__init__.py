from gml_fmt.config.loader import CONFIG_FILENAMES, ConfigSource, load_lang_config, resolve_lang_config
from gml_fmt.config.model import LangConfig

__all__ = [
    "CONFIG_FILENAMES",
    "ConfigSource",
    "LangConfig",
    "load_lang_config",
    "resolve_lang_config",
]
