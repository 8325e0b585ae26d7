"""Tests for turning post records into documents."""

from conftest import BLOG, LABEL_SCHEME, make_record

from blogport.core.assembly import build_front_matter, convert_to_post, post_categories, post_slug
from blogport.core.types import Category, PostRecord


def test_slug_comes_from_the_alternate_link():
    record = make_record("2010/05/primera-entrada.html")

    assert post_slug(record) == "unomascero_blogspot_com-2010-05-primera-entrada_html"


def test_slug_falls_back_to_the_raw_id():
    record = PostRecord(id="tag:blogger.com,1999:blog-1.post-42", published="2010-05-03T21:15:00")

    assert post_slug(record) == "tag:blogger.com,1999:blog-1.post-42"


def test_categories_keep_only_labels_after_the_constants():
    record = make_record("x.html", labels=("música", "cine"))

    categories = post_categories(record, LABEL_SCHEME, ["personal", "vidas pasadas"])

    assert categories == ["personal", "vidas pasadas", "música", "cine"]


def test_categories_ignore_other_schemes():
    record = PostRecord(
        id="1",
        published="2010-05-03T21:15:00",
        categories=[Category(term="stray", scheme="http://example.com/other")],
    )

    assert post_categories(record, LABEL_SCHEME, ["personal"]) == ["personal"]


def test_front_matter_uses_configured_constants(config):
    record = make_record("2010/05/cita.html", title='Dijo "hola"', labels=("música",))

    front_matter = build_front_matter(record, config)

    assert front_matter.id == record.id
    assert front_matter.draft is False
    assert front_matter.date == record.published
    assert front_matter.title == "Dijo 'hola'"
    assert front_matter.description == f"post importado desde {BLOG}"
    assert front_matter.slug == "unomascero_blogspot_com-2010-05-cita_html"
    assert front_matter.tags == ("recuerdos", "unomascero")
    assert front_matter.categories == ("personal", "vidas pasadas", "música")
    assert front_matter.external_link == BLOG
    assert front_matter.series == ("vidas pasadas", "píldoras para la egolatría")
    assert front_matter.aliases == ()


def test_draft_flag_overrides_config(config):
    record = make_record("x.html")

    assert build_front_matter(record, config, draft=True).draft is True


def test_convert_to_post_prepends_the_banner(config):
    record = make_record("x.html", content="<b>hi</b>")

    document = convert_to_post("BANNER\n\n", True, record, str.upper, config)

    assert document.body == "BANNER\n\n<B>HI</B>"
    assert document.front_matter.draft is True
