"""
API settings for the Pattern Catalogue service.
Externalizes config for portability across local/CI/hosted runs.
"""
import os


class ApiSettings:
    """API settings with environment variable support."""

    def __init__(self):
        self.api_version: str = os.getenv("API_VERSION", "1.0.0")
        # Render sets RENDER_GIT_COMMIT; fall back to BUILD_COMMIT
        self.build_commit: str = (
            os.getenv("RENDER_GIT_COMMIT")
            or os.getenv("BUILD_COMMIT")
            or "unknown"
        )
        self.environment: str = os.getenv("ENVIRONMENT", "development")
        self.port: int = int(os.getenv("PORT", "8000"))
        # Script runs execute catalogue code on request; hosts can switch them off
        self.enable_run_api: bool = os.getenv("ENABLE_RUN_API", "true").lower() == "true"


settings = ApiSettings()
