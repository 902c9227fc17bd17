"""Sample upstream markup for catalog and pairing tests.

All markup is defined as string constants, mirroring the structure of the
certification service's listing and detail pages.
"""

BASE_URL = "https://shop.example.com/apps/verisart"

CERTIFICATE_URL = "https://verisart.com/works/abc123"

# =============================================================================
# LISTING SAMPLES
# =============================================================================

PREVIEW_CARD_TEMPLATE = """
<article data-test="previewCard" class="ver-flex ver-flex-col">
  <a href="/apps/verisart/items/{slug}">
    <img src="{image}" alt="{title}">
  </a>
  <div class="ver-text-lg ver-leading-tight">
    <span class="ver-truncate">{title}</span>
    <span class="ver-inline">{year},</span>
  </div>
  <div class="ver-text-base ver-font-bold">{artist}</div>
</article>
"""


def preview_card(title: str, artist: str, year: str, image: str = "", slug: str = "x") -> str:
    return PREVIEW_CARD_TEMPLATE.format(
        title=title, artist=artist, year=year, image=image, slug=slug
    )


SINGLE_CARD_LISTING = f"""<!DOCTYPE html>
<html>
<head><title>Certified works</title></head>
<body>
  <main>
    {preview_card("Study No. 4", "A. Vega", "2019", "https://res.cloudinary.com/demo/study4.jpg")}
  </main>
</body>
</html>
"""

THREE_CARD_LISTING = f"""<!DOCTYPE html>
<html>
<body>
  <section class="grid">
    {preview_card("Study No. 4", "A. Vega", "2019", "https://res.cloudinary.com/demo/study4.jpg")}
    {preview_card("Blue Hour", "M. Osei", "2021", "https://res.cloudinary.com/demo/blue.jpg")}
    {preview_card("Salt  Lines", "J. Park", "2017", "/images/salt.jpg")}
  </section>
</body>
</html>
"""

# Second card is missing year and image; third is missing artist
MALFORMED_LISTING = """
<html><body>
  <article data-test="previewCard">
    <div class="ver-text-lg"><span class="ver-truncate">Harbor</span><span class="ver-inline">2020,</span></div>
    <div class="ver-text-base ver-font-bold">L. Chen</div>
    <img src="https://res.cloudinary.com/demo/harbor.jpg">
  </article>
  <article data-test="previewCard">
    <div class="ver-text-lg"><span class="ver-truncate">Untitled Fragment</span></div>
    <div class="ver-text-base ver-font-bold">Anonymous</div>
  </article>
  <article data-test="previewCard">
    <div class="ver-text-lg"><span class="ver-truncate">Night Study</span><span class="ver-inline">2018</span></div>
    <img data-src="https://res.cloudinary.com/demo/night.jpg">
  </article>
</body></html>
"""

# Both cards normalize to "study-no-4-2019"
COLLIDING_LISTING = f"""
<html><body>
  {preview_card("Study No. 4", "A. Vega", "2019", "https://res.cloudinary.com/demo/first.jpg")}
  {preview_card("Blue Hour", "M. Osei", "2021")}
  {preview_card("study no 4", "B. Vega", "2019", "https://res.cloudinary.com/demo/second.jpg")}
</body></html>
"""

EMPTY_LISTING = "<html><body><p>No certified works yet.</p></body></html>"

# =============================================================================
# DETAIL SAMPLES
# =============================================================================

DETAIL_WITH_CERTIFICATE = f"""<!DOCTYPE html>
<html>
<body>
  <header><a href="https://verisart.com/works/header-link">Verisart</a></header>
  <main>
    <h1>Study No. 4</h1>
    <a href="https://example.com/shop">Shop</a>
    <div data-test="certificate">
      <p>This work is certified.</p>
      <a href="{CERTIFICATE_URL}">View certificate</a>
    </div>
  </main>
</body>
</html>
"""

# No dedicated container; the link sits directly in <main>
DETAIL_WITH_CERTIFICATE_IN_MAIN = """
<html><body>
  <main>
    <a href="/apps/verisart/">Back</a>
    <a href="https://www.verisart.com/works/xyz789">Certificate</a>
  </main>
</body></html>
"""

DETAIL_WITHOUT_CERTIFICATE = """
<html><body>
  <main>
    <h1>Study No. 4</h1>
    <a href="https://example.com/shop">Shop</a>
    <a href="https://verisart.com/about">About Verisart</a>
  </main>
</body></html>
"""
