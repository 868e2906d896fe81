from .config import ServerConfig, load_server_config, render_template, DEFAULT_CONFIG_PATH

__all__ = ["ServerConfig", "load_server_config", "render_template", "DEFAULT_CONFIG_PATH"]
