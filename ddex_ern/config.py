from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults, MessageControlTypes


@dataclass(frozen=True, slots=True)
class BuilderConfig:
    language_code: str = Defaults.LANGUAGE_CODE
    message_control_type: str | None = None
    release_profile_version_id: str = Defaults.RELEASE_PROFILE_VERSION_ID
    avs_version_id: str | None = None
    default_territory: str = Defaults.TERRITORY
    default_language: str = Defaults.LANGUAGE_CODE

    def __post_init__(self) -> None:
        if not self.language_code.strip():
            raise ValueError("language_code must not be empty")
        if (
            self.message_control_type is not None
            and self.message_control_type not in MessageControlTypes.ALL
        ):
            raise ValueError(
                "message_control_type must be one of "
                f"{', '.join(MessageControlTypes.ALL)}, got {self.message_control_type}"
            )
        if not self.default_territory.strip():
            raise ValueError("default_territory must not be empty")


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> BuilderConfig:
        config = BuilderConfig()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(config_file: Path, base_config: BuilderConfig) -> BuilderConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        message = _get_table(data, "message")
        defaults = _get_table(data, "defaults")
        language_code = base_config.language_code
        if (value := message.get("language_code")) is not None:
            language_code = str(value)
        message_control_type = base_config.message_control_type
        if "message_control_type" in message:
            raw = message.get("message_control_type")
            cleaned = str(raw).strip() if raw is not None else ""
            message_control_type = cleaned or None
        release_profile = base_config.release_profile_version_id
        if (value := message.get("release_profile_version_id")) is not None:
            release_profile = str(value)
        avs_version_id = base_config.avs_version_id
        if (value := message.get("avs_version_id")) is not None:
            avs_version_id = _coerce_str(value, key="message.avs_version_id")
        default_territory = base_config.default_territory
        if (value := defaults.get("territory")) is not None:
            default_territory = str(value)
        default_language = base_config.default_language
        if (value := defaults.get("language")) is not None:
            default_language = str(value)
        return BuilderConfig(
            language_code=language_code,
            message_control_type=message_control_type,
            release_profile_version_id=release_profile,
            avs_version_id=avs_version_id,
            default_territory=default_territory,
            default_language=default_language,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_str(value: object, *, key: str) -> str:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a string or int, got bool")
    if isinstance(value, (int, str)):
        return str(value)
    raise ValueError(f"{key} must be a string or int, got {type(value).__name__}")
