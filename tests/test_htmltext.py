import pytest

from mailroom.htmltext import generate_text


@pytest.mark.parametrize(
    "html, expected",
    [
        ("<p>Title</p>", "Title"),
        ("<p>a</p><p>b</p>", "a\n\nb"),
        ("line1<br>line2", "line1\nline2"),
        ("Tom &amp; Jerry", "Tom & Jerry"),
        ("<p>  lots   of\n  space </p>", "lots of space"),
    ],
)
def test_basic_text(html, expected):
    assert generate_text(html) == expected


def test_script_and_style_are_dropped():
    html = "<style>p{}</style><script>alert(1)</script><p>Body</p>"
    assert generate_text(html) == "Body"


def test_link_with_href():
    html = '<a href="https://example.com/page">site</a>'
    assert generate_text(html) == "site ( https://example.com/page )"


def test_link_same_as_text():
    html = '<a href="https://example.com">https://example.com</a>'
    assert generate_text(html) == "https://example.com"


def test_mailto_link():
    html = '<a href="mailto:alice@example.com">Alice</a>'
    assert generate_text(html) == "Alice ( alice@example.com )"


def test_headings():
    assert generate_text("<h1>Hi</h1>") == "**\nHi\n**"
    assert generate_text("<h2>Sub</h2>") == "---\nSub\n---"


def test_table():
    html = (
        "<table><tr><th>Name</th><th>Qty</th></tr>"
        "<tr><td>pen</td><td>2</td></tr></table>"
    )
    expected = (
        "+------+-----+\n"
        "| NAME | QTY |\n"
        "+------+-----+\n"
        "| pen  | 2   |\n"
        "+------+-----+"
    )
    assert generate_text(html) == expected


def test_preformatted_keeps_spacing():
    assert generate_text("<pre>  a\n  b</pre>") == "  a\n  b"


def test_blockquote():
    assert generate_text("<blockquote><p>quoted</p></blockquote>") == "> quoted"