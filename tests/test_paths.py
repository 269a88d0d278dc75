import datetime as dt

import pytest

from blogsite.content import Post, Til, get_collection
from blogsite.paths import TIL_IMAGE_TITLE, get_static_paths, target_for, target_for_post, target_for_til


def _post(slug="hello", title="Hello", description="World"):
    return Post(slug=slug, title=title, description=description, published_at=dt.date(2024, 1, 15))


def _til(slug="walrus", title="The walrus operator", tags=("python",)):
    return Til(slug=slug, title=title, published_at=dt.date(2024, 3, 2), tags=tags)


def test_post_target():
    target = target_for_post(_post())
    assert target.path == "posts/hello"
    assert target.title == "Hello"
    assert target.description == "World"
    assert target.date == dt.date(2024, 1, 15)
    assert target.tags is None


def test_til_target_uses_constant_title():
    target = target_for_til(_til())
    assert target.path == "til/walrus"
    assert target.title == TIL_IMAGE_TITLE == "Today I Learned"
    assert target.description == "The walrus operator"
    assert target.tags == ("python",)


def test_target_for_dispatches_on_variant():
    assert target_for(_post()).path.startswith("posts/")
    assert target_for(_til()).path.startswith("til/")
    with pytest.raises(TypeError):
        target_for({"slug": "x"})


def test_posts_come_before_tils_in_source_order(content_dir):
    posts = get_collection("posts", content_dir)
    tils = get_collection("tils", content_dir)
    targets = get_static_paths(posts, tils)
    assert [t.path for t in targets] == [
        "posts/a-first-post",
        "posts/b-second-post",
        "til/git-worktrees",
        "til/python-walrus",
    ]


def test_paths_are_unique_across_collections():
    targets = get_static_paths([_post(slug="same")], [_til(slug="same")])
    paths = [t.path for t in targets]
    assert len(paths) == len(set(paths))


def test_duplicate_path_is_rejected():
    with pytest.raises(ValueError, match="posts/dup"):
        get_static_paths([_post(slug="dup"), _post(slug="dup")], [])


def test_props_round_into_image_handler_input():
    props = target_for_til(_til()).props()
    assert set(props) == {"title", "description", "date", "tags"}
