from __future__ import annotations

import pytest

from ._gate import require_arch_checks_enabled
from ._utils import iter_source_files, matches_prefix, parse_imports


@pytest.mark.parametrize(
    ("layer", "forbidden"),
    [
        ("core/", ("ecsdeploy.services", "ecsdeploy.output", "ecsdeploy.cli", "ecsdeploy.platform")),
        ("platform/", ("ecsdeploy.services", "ecsdeploy.cli")),
        ("services/", ("ecsdeploy.cli",)),
    ],
)
def test_lower_layers_do_not_import_upper_layers(layer: str, forbidden: tuple[str, ...]) -> None:
    require_arch_checks_enabled()

    offenders: list[str] = []
    for rel, path in iter_source_files():
        if not rel.startswith(layer):
            continue
        for item in parse_imports(path):
            if any(matches_prefix(item.module, prefix) for prefix in forbidden):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, "Layering violations:\n" + "\n".join(offenders)
