import pytest

from conftest import FakePage
from pricewatch.marketplaces import (
    AMAZON,
    FLIPKART,
    first_text,
    hostname_of,
    resolve_strategy,
)
from pricewatch.marketplaces.flipkart import LOGIN_POPUP_CLOSE, dismiss_login_popup


@pytest.mark.parametrize(
    "hostname, expected",
    [
        ("www.amazon.in", AMAZON),
        ("amazon.co.uk", AMAZON),
        ("smile.amazon.com", AMAZON),
        ("www.flipkart.com", FLIPKART),
        ("dl.flipkart.com", FLIPKART),
        ("WWW.AMAZON.DE", AMAZON),
    ],
)
def test_resolve_strategy_matches_by_substring(hostname, expected):
    assert resolve_strategy(hostname) is expected


@pytest.mark.parametrize("hostname", ["ebay.com", "www.noon.com", ""])
def test_resolve_strategy_unsupported(hostname):
    assert resolve_strategy(hostname) is None


def test_hostname_of_rejects_malformed_urls():
    assert hostname_of("https://www.amazon.in/dp/X") == "www.amazon.in"
    assert hostname_of("not a url") is None
    assert hostname_of("ftp://amazon.in/file") is None
    assert hostname_of("https://[::1") is None


@pytest.mark.asyncio
async def test_first_text_short_circuits_on_first_match():
    page = FakePage({"div.b": "second", "div.c": "third"})

    text, selector = await first_text(page, ["div.a", "div.b", "div.c"])

    assert (text, selector) == ("second", "div.b")
    assert page.queried == ["div.a", "div.b"]


@pytest.mark.asyncio
async def test_first_text_skips_blank_elements():
    page = FakePage({"div.a": "   ", "div.b": "₹499"})
    assert await first_text(page, ["div.a", "div.b"]) == ("₹499", "div.b")


@pytest.mark.asyncio
async def test_first_text_none_when_nothing_matches():
    assert await first_text(FakePage(), ["div.a"]) == (None, None)


@pytest.mark.asyncio
async def test_dismiss_login_popup_clicks_close_button():
    page = FakePage({LOGIN_POPUP_CLOSE: "✕"})
    await dismiss_login_popup(page)
    assert page.clicked == [LOGIN_POPUP_CLOSE]


@pytest.mark.asyncio
async def test_dismiss_login_popup_absent_is_not_an_error():
    page = FakePage()
    await dismiss_login_popup(page)
    assert page.clicked == []
