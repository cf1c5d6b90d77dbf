from bs4 import BeautifulSoup

from .helpers import PNG_BYTES

CRAWLER_UA = "facebookexternalhit/1.1 (+http://www.facebook.com/externalhit_uatext.php)"


def meta(html, key, attr="property"):
    tag = BeautifulSoup(html, "html.parser").find("meta", attrs={attr: key})
    return tag["content"] if tag else None


async def test_preview_for_published_article(async_client, make_article, storage):
    image = storage.save_bytes(PNG_BYTES, "cover.png")
    make_article(title="Fair <b>opens</b>", slug="fair-opens", image_url=image)

    response = await async_client.get("/news/fair-opens", headers={"User-Agent": CRAWLER_UA})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    html = response.text
    assert meta(html, "og:title") == "Fair opens"
    assert meta(html, "og:image") == f"https://purvanchallive.in{image}"
    assert meta(html, "og:url") == "https://purvanchallive.in/news/fair-opens"
    assert "<script>" not in html


async def test_visitors_get_spa_redirect(async_client, make_article):
    make_article(slug="fair-opens")

    response = await async_client.get("/news/fair-opens", headers={"User-Agent": "Mozilla/5.0 Chrome/126.0"})

    assert response.status_code == 200
    assert "/#/news/fair-opens" in response.text
    assert "window.location.replace" in response.text


async def test_preview_unknown_slug(async_client):
    response = await async_client.get("/news/no-such-story", headers={"User-Agent": CRAWLER_UA})

    assert response.status_code == 404
    assert meta(response.text, "robots", attr="name") == "noindex"
    assert meta(response.text, "og:image") == "https://purvanchallive.in/favicon.png"


async def test_preview_hides_drafts(async_client, make_article):
    make_article(slug="secret-draft", is_published=False)

    response = await async_client.get("/news/secret-draft")

    assert response.status_code == 404
