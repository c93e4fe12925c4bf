from pydantic_settings import BaseSettings

from .retriever import GITHUB_COMMITS_URL, GITHUB_LIST_URL
from .yaml_config import get_defaults

_defaults = get_defaults()


class Settings(BaseSettings):
    model_config = {"env_prefix": "PSL_"}

    # GitHub list source
    commits_url: str = _defaults.get("commits_url", GITHUB_COMMITS_URL)
    list_url_template: str = _defaults.get("list_url_template", GITHUB_LIST_URL)
    http_timeout: float = _defaults.get("http_timeout", 30.0)

    # Persisted table, loaded at startup when present
    cache_path: str = _defaults.get("cache_path", "data/public_suffix_list.json.z")
    update_on_start: bool = _defaults.get("update_on_start", False)

    # Logging
    log_json: bool = _defaults.get("log_json", True)


settings = Settings()
