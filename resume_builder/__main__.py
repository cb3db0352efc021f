"""Run the resume-builder API server.

Usage:  python -m resume_builder [--host HOST] [--port PORT] [--log-level LEVEL]
"""

import argparse

import uvicorn

from resume_builder.api import create_app
from resume_builder.config import load_config_from_env
from resume_builder.logger import setup_logging


def main(argv=None):
    config = load_config_from_env()

    parser = argparse.ArgumentParser(prog="resume_builder", description=__doc__.splitlines()[0])
    parser.add_argument("--host", default=config.host)
    parser.add_argument("--port", type=int, default=config.port)
    parser.add_argument("--log-level", default=config.log_level)
    args = parser.parse_args(argv)

    config.host, config.port, config.log_level = args.host, args.port, args.log_level
    setup_logging(config.log_level)

    uvicorn.run(create_app(config), host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
