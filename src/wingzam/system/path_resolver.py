import os
from pathlib import Path


class PathResolver:
    """Central authority for all file path resolution in Wingzam.

    Uses environment variables for configuration with sensible defaults.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        self.app_dir = Path(os.getenv("WINGZAM_APP", "/opt/wingzam"))
        self.data_dir = Path(os.getenv("WINGZAM_DATA", "/var/lib/wingzam"))

    def get_wingzam_config_path(self) -> Path:
        """Get the path to the main configuration file.

        Checks WINGZAM_CONFIG environment variable first, then falls back to default.
        """
        config_path = os.getenv("WINGZAM_CONFIG")
        if config_path:
            return Path(config_path)

        # Default: runtime config in data directory
        return self.get_data_dir() / "config" / "wingzam.yaml"

    def get_catalog_path(self) -> Path:
        """Get the path to the precomputed bird catalog.

        The catalog is produced out-of-band by the enrichment step and shipped
        read-only with the application. WINGZAM_CATALOG overrides the default.
        """
        catalog_path = os.getenv("WINGZAM_CATALOG")
        if catalog_path:
            return Path(catalog_path)
        return self.app_dir / "data" / "birds.json"

    def get_data_dir(self) -> Path:
        """Get the data directory path.

        Returns:
            Path to the data directory where all runtime data is stored.
        """
        return self.data_dir
