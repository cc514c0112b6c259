from pathlib import Path


def get_package_root() -> Path:
    """Get the directory of the installed pgdeploy package.

    Package data (the bundled manifests) lives below it, both in a
    source checkout and in site-packages.

    Returns:
        Path to the pgdeploy package directory
    """
    # pgdeploy/utils/paths.py -> pgdeploy/
    return Path(__file__).resolve().parent.parent


def get_project_root() -> Path:
    """Get the directory the tool is run from.

    kubectl runs there and the optional .env file is read from there.
    """
    return Path.cwd()
