"""Static vocabulary tables for query understanding."""

import re

from shopsense.data.schemas import SearchIntent


CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "electronics": [
        "phone", "laptop", "computer", "tablet", "headphone", "speaker", "camera",
        "tv", "monitor", "keyboard", "mouse", "charger", "cable", "gaming", "tech",
    ],
    "fashion": [
        "shirt", "dress", "pants", "shoes", "jacket", "bag", "watch", "jewelry",
        "clothing", "apparel", "fashion", "style", "outfit", "wear",
    ],
    "home": [
        "furniture", "kitchen", "bedroom", "living room", "decor", "lamp", "table",
        "chair", "sofa", "bed", "storage", "organization", "home improvement",
    ],
    "sports": [
        "fitness", "gym", "workout", "exercise", "sports", "running", "yoga",
        "swimming", "bicycle", "outdoor", "athletic", "health",
    ],
    "books": [
        "book", "novel", "textbook", "magazine", "reading", "literature",
        "fiction", "non-fiction", "educational", "study",
    ],
}

SYNONYMS: dict[str, list[str]] = {
    "phone": ["mobile", "smartphone", "cell phone", "iphone", "android"],
    "laptop": ["computer", "notebook", "pc", "macbook"],
    "shoes": ["sneakers", "boots", "sandals", "footwear"],
    "bag": ["purse", "backpack", "handbag", "tote"],
    "watch": ["timepiece", "smartwatch", "wristwatch"],
    "cheap": ["affordable", "budget", "inexpensive", "low cost"],
    "expensive": ["premium", "luxury", "high-end", "costly"],
    "good": ["quality", "excellent", "great", "best", "top rated"],
}

BRAND_KEYWORDS: dict[str, list[str]] = {
    "apple": ["iphone", "ipad", "macbook", "airpods", "apple watch"],
    "samsung": ["galaxy", "samsung phone", "samsung tv"],
    "nike": ["nike shoes", "nike sneakers", "swoosh"],
    "sony": ["playstation", "sony camera", "sony headphones"],
}

# Declaration order matters: the last match within each class wins
ATTRIBUTE_VOCABULARY: dict[str, list[str]] = {
    "color": [
        "red", "blue", "green", "black", "white", "yellow",
        "purple", "pink", "brown", "gray", "orange",
    ],
    "size": ["small", "medium", "large", "xl", "xxl", "s", "m", "l"],
    "material": ["cotton", "leather", "plastic", "metal", "wood", "glass", "ceramic"],
}

# Tested in order, first match wins
INTENT_PATTERNS: list[tuple[SearchIntent, re.Pattern]] = [
    (SearchIntent.PRICE_CONSCIOUS, re.compile(r"\b(cheap|affordable|budget|under|below|less than)\b")),
    (SearchIntent.PREMIUM_FOCUSED, re.compile(r"\b(premium|luxury|expensive|high.?end|best quality)\b")),
    (SearchIntent.COMPARISON, re.compile(r"\b(vs|versus|compare|better|best)\b")),
    (SearchIntent.PURCHASE_INTENT, re.compile(r"\b(buy|purchase|order|get)\b")),
    (SearchIntent.INFORMATION_SEEKING, re.compile(r"\b(review|rating|feedback|opinion)\b")),
    (SearchIntent.GIFT_SEEKING, re.compile(r"\b(gift|present|for him|for her|birthday|anniversary)\b")),
]

# (pattern, bound) applied in order; "range" sets both bounds
PRICE_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\$?(\d+)\s*[-to]+\s*\$?(\d+)"), "range"),
    (re.compile(r"under\s*\$?(\d+)", re.IGNORECASE), "max"),
    (re.compile(r"below\s*\$?(\d+)", re.IGNORECASE), "max"),
    (re.compile(r"less\s*than\s*\$?(\d+)", re.IGNORECASE), "max"),
    (re.compile(r"above\s*\$?(\d+)", re.IGNORECASE), "min"),
    (re.compile(r"over\s*\$?(\d+)", re.IGNORECASE), "min"),
]
