from pricewatch.marketplaces.base import SiteStrategy

AMAZON = SiteStrategy(
    name="amazon",
    base_domain="amazon",
    title_selectors=("#productTitle",),
    price_selectors=(
        "span.a-price-whole",
        ".a-price.a-text-price .a-offscreen",
        ".a-price .a-offscreen",
    ),
    title_wait_ms=15_000,
)
