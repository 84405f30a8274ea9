import pytest

from contenttypes.shared.alias import to_safe_alias


@pytest.mark.parametrize(
    "alias, expected",
    [
        ("news", "news"),
        ("News", "news"),
        ("NewsItem", "newsItem"),
        ("news-item", "newsItem"),
        ("news_item", "newsItem"),
        ("gallery__large-image", "galleryLargeImage"),
        ("  page  ", "page"),
        ("v2.page", "v2.page"),
        ("-leading", "leading"),
    ],
)
def test_safe_aliases(alias, expected):
    assert to_safe_alias(alias) == expected


@pytest.mark.parametrize(
    "alias",
    [
        None,
        "",
        "   ",
        "blog post",
        "news\titem",
        "café",
        "news!",
        "<script>",
        "1stPage",
        ".hidden",
        "xmlData",
        "XMLFeed",
        "_",
        "--",
    ],
)
def test_unsafe_aliases_give_none(alias):
    assert to_safe_alias(alias) is None
