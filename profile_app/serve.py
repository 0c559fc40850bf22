"""Run the profile API with uvicorn.

Usage:
    python -m profile_app.serve
"""
import uvicorn

from profile_app.core import config


def main() -> None:
    config.validate_runtime_config()
    uvicorn.run(
        "profile_app.main:app",
        host="0.0.0.0",
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
