"""
Settings loading: YAML defaults with environment variable overrides
"""
import os
import logging
from pathlib import Path
from typing import Mapping, Optional, Union

import yaml

from .enums import SortKey
from .schema import DEFAULT_INITIAL_CAPITAL, LeaderboardSettings
from ..core.errors import SettingsError
from ..core.utils import parse_number

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"

def split_tabs(value: Union[str, list, None]) -> list:
    """'Tejas, Miguel,,Gabe' -> ['Tejas', 'Miguel', 'Gabe']"""
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [str(item).strip() for item in items if str(item).strip()]

def load_settings(path: Optional[Union[str, Path]] = None,
                  environ: Optional[Mapping[str, str]] = None) -> LeaderboardSettings:
    """Load settings from YAML, then apply environment overrides"""
    config_path = Path(path) if path else DEFAULT_SETTINGS_PATH
    env = os.environ if environ is None else environ

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load settings from {config_path}: {e}")
        raise SettingsError(f"Cannot read settings file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise SettingsError(f"Settings file {config_path} must contain a mapping")

    sheet = config.get('sheet', {}) or {}
    options = config.get('settings', {}) or {}

    sheet_id = env.get('SHEET_ID') or sheet.get('id')
    if not sheet_id:
        raise SettingsError("No sheet id configured (sheet.id or SHEET_ID)")

    tabs = split_tabs(env.get('SHEET_TABS') if env.get('SHEET_TABS') is not None else sheet.get('tabs'))

    raw_capital = env.get('INITIAL_CAPITAL', options.get('initial_capital', DEFAULT_INITIAL_CAPITAL))
    initial_capital = parse_number(raw_capital)
    if initial_capital is None:
        logger.warning(f"Initial capital {raw_capital!r} is not a number, using {DEFAULT_INITIAL_CAPITAL:,.0f}")
        initial_capital = DEFAULT_INITIAL_CAPITAL

    sort_value = options.get('sort_key', SortKey.RETURN_PCT.value)
    try:
        sort_key = SortKey(sort_value)
    except ValueError as e:
        raise SettingsError(f"Unknown sort_key: {sort_value}") from e

    settings = LeaderboardSettings(
        sheet_id=str(sheet_id),
        tabs=tabs,
        initial_capital=initial_capital,
        google_sheets_api_key=env.get('GOOGLE_SHEETS_API_KEY') or options.get('google_sheets_api_key'),
        service_account_file=env.get('GOOGLE_SERVICE_ACCOUNT_FILE') or options.get('service_account_file'),
        cache_ttl_seconds=int(options.get('cache_ttl_seconds', 60)),
        request_timeout=int(options.get('request_timeout', 30)),
        sort_key=sort_key,
        log_level=str(options.get('log_level', 'INFO')),
    )

    logger.info(f"Loaded settings for {len(settings.tabs)} tabs from {config_path}")
    return settings
