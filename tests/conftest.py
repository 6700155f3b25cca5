"""
共用測試資料：一組最小但完整的 tokens / brand / ui-kit JSON。
"""
import copy

import pytest

from recursica_forge.models import RecursicaInput

TOKENS = {
    "tokens": {
        "colors": {
            "scale-02": {
                "100": {"$type": "color", "$value": "#f0f0f0"},
                "500": {"$type": "color", "$value": "#ffffff"},
            },
        },
        "sizes": {
            "default": {"$type": "dimension", "$value": {"value": 4, "unit": "px"}},
        },
        "opacities": {
            "disabled": {"$type": "number", "$value": 0.5},
        },
    }
}

BRAND = {
    "brand": {
        "typography": {
            "body": {
                "$type": "typography",
                "$value": {
                    "fontFamily": "Inter",
                    "fontSize": {"value": 16, "unit": "px"},
                    "fontWeight": 400,
                },
            },
        },
        "dimensions": {
            "border-radii": {
                "default": {"$type": "dimension", "$value": "{tokens.sizes.default}"},
            },
        },
        "themes": {
            "light": {
                "palettes": {
                    "neutral": {
                        "200": {"color": {"tone": {"$type": "color", "$value": "{tokens.colors.scale-02.500}"}}},
                    },
                },
                "layers": {
                    "layer-0": {
                        "properties": {
                            "surface": {"$type": "color", "$value": "{brand.palettes.neutral.200.color.tone}"},
                        },
                    },
                },
            },
            "dark": {
                "palettes": {
                    "neutral": {
                        "800": {"color": {"tone": {"$type": "color", "$value": "#111111"}}},
                    },
                },
                "layers": {
                    "layer-0": {
                        "properties": {
                            "surface": {"$type": "color", "$value": "{brand.palettes.neutral.default.color.tone}"},
                        },
                    },
                },
            },
        },
    }
}

UIKIT = {
    "ui-kit": {
        "components": {
            "button": {
                "colors": {
                    "layer-0": {"background": {"$type": "color", "$value": "{brand.layers.layer-0.properties.surface}"}},
                    "layer-1": {"background": {"$type": "color", "$value": "#ff0000"}},
                    "layer-2": {"background": {"$type": "color", "$value": "#00ff00"}},
                    "layer-3": {"background": {"$type": "color", "$value": "#0000ff"}},
                },
                "properties": {
                    "height": {"$type": "dimension", "$value": {"value": 32, "unit": "px"}},
                },
            },
        },
    }
}


@pytest.fixture
def sample_input():
    return RecursicaInput(
        tokens=copy.deepcopy(TOKENS),
        brand=copy.deepcopy(BRAND),
        uikit=copy.deepcopy(UIKIT),
    )


def css_lines(css: str) -> list:
    return [line.strip() for line in css.split("\n")]


def css_block(css: str, selector: str) -> str:
    """從 selector 開頭擷取到對應的右大括號。"""
    start = css.index(selector)
    end = css.index("\n}", start)
    return css[start:end]
