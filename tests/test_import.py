import warnings


def test_import():
    try:
        import gammakit  # noqa

        failed = False
    except Exception:
        failed = True

    assert not failed, "Import failed with Exception."


def test_no_syntaxwarnings_on_import():
    with warnings.catch_warnings(record=True) as w:
        warnings.simplefilter("always", SyntaxWarning)
        import gammakit  # noqa

    assert not any(issubclass(warn.category, SyntaxWarning) for warn in w), w
