"""Basic test to verify test infrastructure is working."""


def test_project_structure():
    """Verify that the project structure is set up correctly."""
    import almanac

    assert hasattr(almanac, "__version__")
    assert almanac.__version__ == "0.1.0"


def test_public_api_exports():
    """Verify that the names in __all__ resolve."""
    import almanac

    for name in almanac.__all__:
        assert hasattr(almanac, name), name
