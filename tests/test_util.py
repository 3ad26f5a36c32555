from digisign.util import filename_from_disposition, guess_extension, safe_filename


def test_guess_extension():
    assert guess_extension("application/pdf") == "pdf"
    assert guess_extension("application/pdf; charset=binary") == "pdf"
    assert guess_extension(None) == "bin"
    assert guess_extension("application/unknown") == "bin"


def test_safe_filename_basic():
    assert safe_filename("Hello World.pdf") == "Hello_World.pdf"
    assert safe_filename("  .. ") == "document"
    assert safe_filename("a" * 500).startswith("a" * 120)


def test_filename_from_disposition():
    assert filename_from_disposition('attachment; filename="contract.pdf"') == "contract.pdf"
    assert filename_from_disposition("attachment; filename=contract.pdf") == "contract.pdf"
    assert filename_from_disposition("attachment; filename*=UTF-8''smlouva%20final.pdf") == "smlouva final.pdf"
    assert filename_from_disposition("inline") is None
    assert filename_from_disposition(None) is None
