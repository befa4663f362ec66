"""Simple YAML configuration loader for InterviewPilot."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)


class InterviewPilotConfig:
    """InterviewPilot configuration loader."""
    
    def __init__(self, config_path: str):
        """Initialize configuration loader.
        
        Args:
            config_path: Path to YAML config file (e.g. interviewpilot.yaml)
        """
        self.config_file = Path(config_path)
        
        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
        
        logger.info(f"Loading configuration from: {self.config_file}")
        self.config = self._load_config()
    
    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")
        
        if not config:
            raise ValueError("Configuration file is empty")
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a mapping at the top level")
        
        self._resolve_paths(config)
        
        logger.info("Configuration loaded successfully")
        return config
    
    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent
        
        if 'logging' in config and 'file_path' in config['logging']:
            log_path = config['logging']['file_path']
            if not os.path.isabs(log_path):
                config['logging']['file_path'] = str(config_dir / log_path)
    
    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'timer.tick_interval_seconds').
        
        Args:
            key_path: Dot-separated key path
            default: Default value if key not found
            
        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config
        
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        
        return value
    
    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.
        
        Args:
            key_path: Dot-separated path to config value (e.g., 'gemini.model')
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config
        
        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]
        
        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set to: {value}")
    
    def get_speaker_settings(self) -> Dict[str, float]:
        """Get speaker attribution thresholds, falling back to the built-in defaults."""
        from ..speaker.attribution import (
            DOMINANCE_RATIO,
            STABILITY_MS,
            ANALYSIS_WINDOW_MS,
            RETENTION_MS,
        )
        return {
            "dominance_ratio": float(self.get('speaker_attribution.dominance_ratio', DOMINANCE_RATIO)),
            "stability_ms": int(self.get('speaker_attribution.stability_ms', STABILITY_MS)),
            "window_ms": int(self.get('speaker_attribution.window_ms', ANALYSIS_WINDOW_MS)),
            "retention_ms": int(self.get('speaker_attribution.retention_ms', RETENTION_MS)),
        }
    
    def get_timer_settings(self) -> Dict[str, float]:
        """Get interview timer settings."""
        return {
            "tick_interval_seconds": float(self.get('timer.tick_interval_seconds', 1.0)),
            "countdown_seconds": int(self.get('timer.countdown_seconds', 5)),
        }
    
    def get_gemini_api_key(self) -> str:
        """Get Gemini API key from config or GEMINI_API_KEY - CRASHES if not found."""
        api_key = self.get('gemini.api_key') or os.environ.get('GEMINI_API_KEY')
        if not api_key:
            raise ValueError("Gemini API key not configured (gemini.api_key or GEMINI_API_KEY)")
        return api_key
    
    def get_proxy_url(self) -> Optional[str]:
        """Get speech proxy WebSocket URL, or None when transcription is disabled."""
        return self.get('transcription.proxy_url')
