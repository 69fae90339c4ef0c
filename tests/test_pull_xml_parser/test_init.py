"""Test module for pull_xml_parser package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import pull_xml_parser

    # Assert
    assert pull_xml_parser is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    import pull_xml_parser

    assert isinstance(pull_xml_parser.__version__, str)
    assert pull_xml_parser.__version__ == "0.1.0"


def test_package_all_exports() -> None:
    """Test that __all__ names resolve on the package."""
    import pull_xml_parser

    for name in pull_xml_parser.__all__:
        assert hasattr(pull_xml_parser, name), name

    assert "XMLPullParser" in pull_xml_parser.__all__
    assert "parse_events" in pull_xml_parser.__all__
