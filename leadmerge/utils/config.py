from typing import Dict, Any, Optional, Union
from pathlib import Path
import yaml
import json
import os
from dataclasses import fields

from leadmerge.config import ConsolidationConfig
from leadmerge.exceptions import ConfigurationError

ENV_PREFIX = "LEADMERGE_"


class ConfigManager:
    """Manager for loading and validating configurations."""
    
    def __init__(self, env_prefix: str = ENV_PREFIX):
        """Initialize config manager.
        
        Args:
            env_prefix: Prefix of environment variables holding settings
        """
        self.env_prefix = env_prefix
        
    def load_yaml(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Load YAML configuration file.
        
        Args:
            path: Path to YAML file
            
        Returns:
            Configuration dictionary
            
        Raises:
            ConfigurationError: If file cannot be loaded
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to load config file {path}: {str(e)}",
                details={"path": str(path)}
            )
            
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {path} must contain a mapping",
                details={"path": str(path)}
            )
        return data
        
    def get_env_config(self) -> Dict[str, Any]:
        """Get configuration from environment variables.
        
        ``LEADMERGE_MAX_PASSES=5`` becomes ``{"max_passes": 5}``. Values are
        decoded as JSON where possible, so lists can be given as
        ``LEADMERGE_KEYS='["_id", "phone"]'``.
        Variables that do not name a setting are ignored.
        
        Returns:
            Configuration dictionary
        """
        config = {}
        known = {f.name for f in fields(ConsolidationConfig)}
        
        for key, value in os.environ.items():
            if not key.startswith(self.env_prefix):
                continue
                
            name = key[len(self.env_prefix):].lower()
            if name not in known:
                continue
                
            # Try to parse value
            try:
                value = json.loads(value)
            except json.JSONDecodeError:
                pass
                
            config[name] = value
            
        return config
        
    def load(
        self,
        path: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, Any]] = None
    ) -> ConsolidationConfig:
        """Build the run configuration.
        
        Later sources win: defaults, then the YAML file, then environment
        variables, then explicit overrides. Overrides set to None are ignored.
        
        Args:
            path: Optional YAML configuration file
            overrides: Optional settings taking precedence over everything else
            
        Returns:
            Validated configuration
        """
        settings: Dict[str, Any] = {}
        if path:
            settings.update(self.load_yaml(path))
        settings.update(self.get_env_config())
        if overrides:
            settings.update({k: v for k, v in overrides.items() if v is not None})
            
        return ConsolidationConfig.from_dict(settings)
