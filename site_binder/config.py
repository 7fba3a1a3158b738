"""
Модуль для загрузки и валидации конфигурации SiteBinder.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Tuple, Union
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from site_binder.exceptions import ConfigurationError

PDF_SUFFIX = ".pdf"


class BinderConfig(BaseModel):
    """Конфигурация для одного запуска обхода и сборки PDF."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(..., description="Стартовый URL обхода.")
    max_depth: int = Field(2, ge=0, description="Максимальная глубина обхода ссылок.")
    output: str = Field("output.pdf", min_length=1, description="Путь к итоговому PDF.")
    crawl_timeout: float = Field(300.0, gt=0, description="Таймаут всего обхода (секунд).")
    request_timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    concurrency: int = Field(2, ge=1, description="Число параллельных загрузок.")
    delay: float = Field(1.0, ge=0, description="Пауза перед каждым запросом (секунд).")
    random_delay: float = Field(1.0, ge=0, description="Случайная добавка к паузе (секунд).")
    user_agent: str = Field("SiteBinderBot/1.0", min_length=1, description="Заголовок User-Agent.")
    title: str = Field("Scraped Content", min_length=1, description="Заголовок PDF-документа.")

    @field_validator("base_url", mode="before")
    def _check_base_url(cls, v: Any) -> Any:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("URL is required")
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError(f"not an absolute http(s) URL: {v!r}")
        return v

    @field_validator("output")
    def _ensure_pdf_suffix(cls, v: str) -> str:
        return v if v.endswith(PDF_SUFFIX) else v + PDF_SUFFIX

    @property
    def origin_host(self) -> str:
        return urlparse(self.base_url).hostname or ""

    @property
    def output_path(self) -> Path:
        return Path(self.output)


_LOADERS: Dict[str, Tuple[str, Callable[[str], Any], Tuple[type, ...]]] = {
    ".yaml": ("YAML", yaml.safe_load, (yaml.YAMLError,)),
    ".yml": ("YAML", yaml.safe_load, (yaml.YAMLError,)),
    ".json": ("JSON", json.loads, (json.JSONDecodeError,)),
}


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Читает YAML или JSON и возвращает сырые данные конфига."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix not in _LOADERS:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")
    kind, parse, errors = _LOADERS[suffix]
    try:
        data = parse(path_obj.read_text(encoding="utf-8")) or {}
    except errors as exc:
        raise ValueError(f"Неправильный {kind} в {path_obj}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Конфиг {path_obj.name} должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path]) -> BinderConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект BinderConfig.
    При отсутствии файла бросает FileNotFoundError.
    """
    return BinderConfig(**read_config_file(path))


def build_config(path: Union[str, Path, None] = None, **overrides: Any) -> BinderConfig:
    """
    Собирает конфиг из файла (если задан) и переопределений CLI.

    Значения ``None`` в ``overrides`` игнорируются. Любая ошибка чтения или
    валидации превращается в :class:`ConfigurationError`.
    """
    data: Dict[str, Any] = {}
    if path is not None:
        try:
            data.update(read_config_file(path))
        except (OSError, ValueError, TypeError) as exc:
            raise ConfigurationError(f"Ошибка загрузки конфигурации: {exc}") from exc
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return BinderConfig(**data)
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
        raise ConfigurationError(f"Invalid configuration ({fields}): {exc}", {"fields": fields}) from exc
