from __future__ import annotations

from importlib import metadata


def _version(pkg: str) -> str:
    try:
        return metadata.version(pkg)
    except metadata.PackageNotFoundError:
        return "unknown"


def run_selftest() -> bool:
    """
    Lightweight import/dep check plus one log line through the default factory.
    """
    try:
        import structlog  # noqa: F401
        print(f"logframe selftest: structlog {_version('structlog')}")
    except ImportError as exc:
        print(f"logframe selftest: missing structlog ({exc})")
        return False

    try:
        from logframe.api import Logger, get_factory
        from logframe.levels import Level
        from logframe.noop import NOOP_LOGGER
        print("logframe selftest: core imports ok")
    except ImportError as exc:
        print(f"logframe selftest: import failed ({exc})")
        return False

    factory = get_factory()
    print(f"logframe selftest: factory {type(factory).__name__}")

    logger = Logger.instance("logframe.selftest")
    if logger.at_level(Level.INFO) is not logger.at_info():
        print("logframe selftest: handle cache returned distinct instances")
        return False
    if logger.at_level(Level.OFF) is not NOOP_LOGGER:
        print("logframe selftest: OFF did not resolve to the no-op logger")
        return False
    logger.at_info().log("logframe selftest: %s", "log call ok")

    print("logframe selftest: ok")
    return True


if __name__ == "__main__":
    run_selftest()
