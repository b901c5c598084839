from typing import Literal

from pydantic import BaseModel


class AppCfg(BaseModel):
    name: str = "patient-parser"
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class PathsCfg(BaseModel):
    logs_root: str = "logs"
    inbox: str = "inbox"
    archive: str = "archive"
    error: str = "error"


class HttpCfg(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    route_prefix: str = "/api"


class InboxCfg(BaseModel):
    filename_glob: str = "*.txt"
    watch: bool = True
    debounce_sec: float = 0.5


class Settings(BaseModel):
    app: AppCfg = AppCfg()
    paths: PathsCfg = PathsCfg()
    http: HttpCfg = HttpCfg()
    inbox: InboxCfg = InboxCfg()
