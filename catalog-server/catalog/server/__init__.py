from importlib.metadata import PackageNotFoundError, version


def _resolve_version() -> str:
    try:
        return version("catalog-server")
    except PackageNotFoundError:
        # Running from a source checkout without an install
        return "0.0.0+unknown"


__version__ = _resolve_version()
