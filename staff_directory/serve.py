"""Run the API with uvicorn.

Usage:
    python -m staff_directory.serve
"""
import uvicorn

from staff_directory.core import config


def main() -> None:
    uvicorn.run('staff_directory.main:app', host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
