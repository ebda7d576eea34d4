# === FILE: privacy_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации PrivacyScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Final, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_USER_AGENT: Final[str] = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122 Safari/537.36 privacy-scout"
)
DEFAULT_ACCEPT: Final[str] = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class ScoutConfig(BaseModel):
    """Настройки поиска privacy-контактов и пакетной обработки."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(
        30.0, gt=0, description="Общий бюджет (секунд) на одну попытку поиска: главная + privacy-страница."
    )
    concurrency: int = Field(25, ge=1, description="Сколько поисков выполняется одновременно в пакете.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    accept: str = Field(DEFAULT_ACCEPT, min_length=1, description="Заголовок Accept.")
    widen_subdomains: bool = Field(
        True, description="Повторять поиск на родительском домене, если поддомен ничего не дал."
    )
    max_error_length: int = Field(500, ge=1, description="Максимальная длина сохраняемого сообщения об ошибке.")
    poll_interval: float = Field(2.0, gt=0, description="Период опроса прогресса пакета в CLI (секунд).")


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> ScoutConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект ScoutConfig.
    Без явного пути берёт configs/default.yaml, а если его нет, значения по умолчанию.
    Явно указанный, но отсутствующий файл приводит к FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return ScoutConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return ScoutConfig(**data)


__all__ = ["ScoutConfig", "load_config", "ValidationError", "DEFAULT_USER_AGENT", "DEFAULT_ACCEPT"]
