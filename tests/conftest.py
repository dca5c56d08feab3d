from __future__ import annotations

import pytest

from brandtokens.models import BrandConfig, ExportConfig, ModeBinding
from tests._fixtures.snapshot_builder import SnapshotBuilder, alias, rgba


@pytest.fixture
def snapshot_builder() -> SnapshotBuilder:
    """Provide an empty snapshot builder."""
    return SnapshotBuilder()


@pytest.fixture
def design_system() -> SnapshotBuilder:
    """Two-collection design system: primitives with Light/Dark and one brand's tokens."""
    builder = SnapshotBuilder()
    builder.collection("prim", "Primitives", [("pm-light", "Light"), ("pm-dark", "Dark")])
    builder.collection("tok", "Brand Tokens", [("tm-light", "Brand A Light"), ("tm-dark", "Brand A Dark")])

    builder.variable("red", "Colors/Red/500", "prim", {"pm-light": rgba(1, 0, 0), "pm-dark": rgba(0.5, 0, 0)})
    builder.variable("gray", "Colors/Gray/50", "prim", {"pm-light": rgba(0.95, 0.95, 0.95), "pm-dark": rgba(0.2, 0.2, 0.2)})

    builder.variable("border", "Colors/Border/Primary", "tok", {"tm-light": alias("red"), "tm-dark": alias("red")})
    builder.variable("background", "Colors/Background/Primary", "tok", {"tm-light": alias("gray"), "tm-dark": alias("gray")})
    builder.variable("accent", "Colors/Accent", "tok", {"tm-light": rgba(0, 0, 1, 0.5), "tm-dark": rgba(0, 0, 1)})
    builder.variable("spacing", "Spacing/Small", "tok", {"tm-light": 4, "tm-dark": 4}, resolved_type="FLOAT")
    return builder


@pytest.fixture
def export_config() -> ExportConfig:
    return ExportConfig(
        token_collection_id="tok",
        primitive_collection_id="prim",
        brands=[
            BrandConfig(
                name="Brand A",
                light=ModeBinding(mode_id="tm-light", primitive_mode_id="pm-light"),
                dark=ModeBinding(mode_id="tm-dark", primitive_mode_id="pm-dark"),
            )
        ],
    )
