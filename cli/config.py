"""
CLI Configuration Management
"""

import os
import json
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any


@dataclass
class CLIConfig:
    """Configuration for the PromptIDE terminal workspace"""

    # Service settings
    api_base_url: str = "http://localhost:3000/api"
    local: bool = False  # classify in-process instead of calling /chat
    classifier: str = "remote"  # "remote", "template" or "claude"
    timeout: float = 60.0

    # Workspace settings
    project_name: str = "My Project"

    # Output settings
    verbose: bool = False
    syntax_theme: str = "monokai"
    max_preview_lines: int = 60

    # Interaction settings
    non_interactive: bool = False

    # History settings
    history_file: str = ".promptide_history"

    # Paths
    config_dir: str = field(default_factory=lambda: str(Path.home() / ".promptide"))

    def __post_init__(self):
        Path(self.config_dir).mkdir(parents=True, exist_ok=True)

        if not os.path.isabs(self.history_file):
            self.history_file = str(Path(self.config_dir) / self.history_file)

    @property
    def classifier_mode(self) -> str:
        """--local wins over the configured classifier"""
        return "template" if self.local else self.classifier

    @property
    def recent_projects_file(self) -> str:
        return str(Path(self.config_dir) / "recent_projects.json")

    def load_from_file(self, config_path: str) -> None:
        """Load configuration from JSON file"""
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                data = json.load(f)
                for key, value in data.items():
                    if hasattr(self, key):
                        setattr(self, key, value)

    @classmethod
    def load_default(cls, config_dir: Optional[str] = None) -> "CLIConfig":
        """Load ~/.promptide/config.json, then apply environment overrides"""
        config = cls(config_dir=config_dir) if config_dir else cls()
        default_config_path = Path(config.config_dir) / "config.json"
        if default_config_path.exists():
            config.load_from_file(str(default_config_path))

        config._load_from_env()
        return config

    def _load_from_env(self) -> None:
        """Load configuration from environment variables"""
        env_mappings = {
            "PROMPTIDE_API_URL": "api_base_url",
            "PROMPTIDE_PROJECT": "project_name",
            "PROMPTIDE_LOCAL": ("local", lambda x: x.lower() == "true"),
            "PROMPTIDE_CLASSIFIER": ("classifier", str.lower),
            "PROMPTIDE_TIMEOUT": ("timeout", float),
            "PROMPTIDE_VERBOSE": ("verbose", lambda x: x.lower() == "true"),
        }

        for env_var, mapping in env_mappings.items():
            value = os.environ.get(env_var)
            if value:
                if isinstance(mapping, tuple):
                    attr, converter = mapping
                    setattr(self, attr, converter(value))
                else:
                    setattr(self, mapping, value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary"""
        return asdict(self)
