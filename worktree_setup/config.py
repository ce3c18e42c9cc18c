"""Configuration handling for worktree-setup"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Config:
    """Configuration for worktree-setup with validation."""

    # Remote and branch conventions
    remote: str = "origin"
    integration_branch: str = "develop"
    feature_prefix: str = "feature/"
    branch_namespaces: List[str] = field(default_factory=lambda: ["feature/", "hotfix/", "release/"])

    # Dependency installation, checked per package directory in order
    packages: List[str] = field(default_factory=lambda: ["backend", "frontend", "mcp-events-server"])
    manifest_file: str = "package.json"
    installed_dir: str = "node_modules"
    install_command: List[str] = field(default_factory=lambda: ["npm", "install", "--silent"])

    # Execution modes
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_remote()
        self._validate_integration_branch()
        self._validate_feature_prefix()
        self._validate_branch_namespaces()
        self._validate_packages()
        self._validate_install_command()

    def _validate_remote(self):
        """Validate remote is not empty."""
        if not self.remote or not self.remote.strip():
            raise ValueError("remote cannot be empty")
        self.remote = self.remote.strip()

    def _validate_integration_branch(self):
        """Validate integration_branch is not empty."""
        if not self.integration_branch or not self.integration_branch.strip():
            raise ValueError("integration_branch cannot be empty")
        self.integration_branch = self.integration_branch.strip()

    def _validate_feature_prefix(self):
        """Validate feature_prefix is a namespace ending in '/'."""
        if not self.feature_prefix or not self.feature_prefix.endswith("/"):
            raise ValueError(f"feature_prefix must end with '/', got '{self.feature_prefix}'")

    def _validate_branch_namespaces(self):
        """Validate branch_namespaces and make sure the feature prefix is one of them."""
        if not isinstance(self.branch_namespaces, list):
            raise ValueError("branch_namespaces must be a list")

        if self.feature_prefix not in self.branch_namespaces:
            self.branch_namespaces.append(self.feature_prefix)

    def _validate_packages(self):
        """Validate packages are plain directory names."""
        if not isinstance(self.packages, list):
            raise ValueError("packages must be a list")
        for package in self.packages:
            if not package or "/" in package or package in (".", ".."):
                raise ValueError(f"packages must be plain directory names, got '{package}'")

    def _validate_install_command(self):
        """Validate install_command is a non-empty argument list."""
        if not self.install_command:
            raise ValueError("install_command cannot be empty")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "remote": self.remote,
            "integration_branch": self.integration_branch,
            "feature_prefix": self.feature_prefix,
            "branch_namespaces": self.branch_namespaces,
            "packages": self.packages,
            "manifest_file": self.manifest_file,
            "installed_dir": self.installed_dir,
            "install_command": self.install_command,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        # Extract only known fields
        known_fields = {
            "remote",
            "integration_branch",
            "feature_prefix",
            "branch_namespaces",
            "packages",
            "manifest_file",
            "installed_dir",
            "install_command",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
