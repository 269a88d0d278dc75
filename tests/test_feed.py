import datetime as dt
import xml.etree.ElementTree as ET

from blogsite.content import Post
from blogsite.feed import FeedItem, feed_items, rss


def _post(slug="a", title="A", description="B", published_at=dt.date(2024, 1, 1)):
    return Post(slug=slug, title=title, description=description, published_at=published_at)


def test_feed_item_links_to_post():
    (item,) = feed_items([_post()])
    assert item == FeedItem(title="A", pub_date=dt.date(2024, 1, 1), description="B", link="/posts/a/")


def test_document_contains_post_item():
    document = rss("Blog", "About things", "https://x.test", feed_items([_post()]))
    channel = ET.fromstring(document).find("channel")
    assert channel.findtext("title") == "Blog"
    assert channel.findtext("description") == "About things"
    assert channel.findtext("link") == "https://x.test/"
    item = channel.find("item")
    assert item.findtext("title") == "A"
    assert item.findtext("description") == "B"
    assert item.findtext("link") == "https://x.test/posts/a/"
    assert item.findtext("pubDate") == "Mon, 01 Jan 2024 00:00:00 +0000"
    assert "/posts/a/" in document


def test_items_keep_collection_order():
    posts = [_post(slug="z", title="Z"), _post(slug="a", title="A")]
    channel = ET.fromstring(rss("Blog", "", "https://x.test/", feed_items(posts))).find("channel")
    assert [item.findtext("title") for item in channel.findall("item")] == ["Z", "A"]


def test_text_is_escaped():
    posts = [_post(title="Tom & Jerry <3", description='"quoted"')]
    channel = ET.fromstring(rss("Blog & co", "", "https://x.test", feed_items(posts))).find("channel")
    assert channel.findtext("title") == "Blog & co"
    assert channel.find("item").findtext("title") == "Tom & Jerry <3"


def test_last_build_date_is_latest_post():
    posts = [_post(slug="old"), _post(slug="new", published_at=dt.datetime(2024, 6, 1, 12, 30))]
    channel = ET.fromstring(rss("Blog", "", "https://x.test", feed_items(posts))).find("channel")
    assert channel.findtext("lastBuildDate") == "Sat, 01 Jun 2024 12:30:00 +0000"


def test_empty_feed_is_valid():
    channel = ET.fromstring(rss("Blog", "", "https://x.test", [])).find("channel")
    assert channel.findall("item") == []
