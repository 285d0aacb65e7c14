"""Packaging regression tests.

Tests that verify the source layout and installed package behavior.
"""

from pathlib import Path


def test_source_layout():
    """The package lives under src/ with kernel, schemas and _internal subpackages."""
    here = Path(__file__).resolve().parent
    repo_root = here.parent
    src_zodkit = repo_root / "src" / "zodkit"

    assert src_zodkit.exists(), "zodkit package should exist in src/"
    assert (src_zodkit / "kernel").exists(), "zodkit.kernel should exist"
    assert (src_zodkit / "schemas" / "__init__.py").exists(), "zodkit.schemas should be a regular package"
    assert (src_zodkit / "_internal").exists(), "zodkit._internal should exist"
    assert (repo_root / "pyproject.toml").exists()


def test_import_boundary():
    """The package and its subpackages import cleanly."""
    import zodkit
    import zodkit.kernel.engine  # noqa: F401
    import zodkit.schemas  # noqa: F401

    # In dev mode it's "dev", in installed mode it's "1.0.0"
    assert zodkit.__version__ in ("1.0.0", "dev")


def test_library_installs_no_log_handlers():
    """Importing the library must not configure logging."""
    import logging

    import zodkit  # noqa: F401

    for name in ("zodkit.kernel.engine", "zodkit.kernel.registry", "zodkit.schemas.union"):
        assert logging.getLogger(name).handlers == []
