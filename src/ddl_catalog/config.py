from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    dialect: str = Field(default="mysql", alias="DDL_CATALOG_DIALECT")
    output_dir: Path = Field(default=Path("./out"), alias="DDL_CATALOG_OUTPUT_DIR")
    sql_glob: str = Field(default="*.sql", alias="DDL_CATALOG_SQL_GLOB")
    encoding: str = Field(default="utf-8", alias="DDL_CATALOG_ENCODING")
    log_level: str = Field(default="WARNING", alias="DDL_CATALOG_LOG_LEVEL")
    watch_debounce: float = Field(default=0.8, alias="DDL_CATALOG_WATCH_DEBOUNCE")

settings = Settings()
