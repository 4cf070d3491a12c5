from __future__ import annotations

import pytest

from careermatch.core import Skill, SkillNormalizer
from careermatch.errors import InvalidSkillError


def test_normalize_trims_lowercases_and_collapses_whitespace():
    normalizer = SkillNormalizer()

    skill = normalizer.normalize("  Machine \t  Learning \n")

    assert skill.token == "machine learning"
    assert skill.surface == "machine learning"
    assert not skill.aliased


def test_normalize_resolves_aliases_and_keeps_surface():
    normalizer = SkillNormalizer()

    js = normalizer.normalize("JS")
    javascript = normalizer.normalize("  JavaScript ")

    assert js == javascript == normalizer.normalize("javascript")
    assert js.token == "javascript"
    assert js.surface == "js"
    assert js.aliased
    assert normalizer.normalize("React.js").token == "react"


def test_unknown_skill_passes_through():
    normalizer = SkillNormalizer()

    assert normalizer.normalize("Underwater Basket Weaving").token == "underwater basket weaving"


@pytest.mark.parametrize("raw", ["", "   ", "\t\n", None, 42])
def test_normalize_rejects_empty_and_non_string(raw):
    normalizer = SkillNormalizer()

    with pytest.raises(InvalidSkillError):
        normalizer.normalize(raw)


def test_skill_equality_and_hash_use_token_only():
    assert Skill("javascript", "js") == Skill("javascript")
    assert len({Skill("javascript", "js"), Skill("javascript")}) == 1
    assert str(Skill("python")) == "python"


def test_custom_aliases_extend_defaults():
    normalizer = SkillNormalizer(aliases={" Pwsh ": "PowerShell"})

    assert normalizer.normalize("pwsh").token == "powershell"
    assert normalizer.normalize("js").token == "javascript"
    assert normalizer.aliases["pwsh"] == "powershell"


def test_custom_alias_with_blank_target_is_rejected():
    with pytest.raises(ValueError):
        SkillNormalizer(aliases={"pwsh": "  "})


def test_normalize_all_skips_invalid_and_deduplicates():
    normalizer = SkillNormalizer()

    skills = normalizer.normalize_all(["Python", "", "JS", "javascript", None, "python "])

    assert [skill.token for skill in skills] == ["python", "javascript"]
    assert skills[1].surface == "javascript"


def test_normalize_all_prefers_canonical_surface_on_duplicates():
    normalizer = SkillNormalizer()

    skills = normalizer.normalize_all(["JS", "SQL", "javascript", "js"])

    assert [skill.token for skill in skills] == ["javascript", "sql"]
    assert skills[0].surface == "javascript"
    assert not skills[0].aliased


def test_custom_alias_targets_resolve_through_the_table():
    normalizer = SkillNormalizer(aliases={"ecma": "js", "es6": "ecma"})

    assert normalizer.normalize("ecma") == normalizer.normalize("js")
    assert normalizer.normalize("es6").token == "javascript"
    assert normalizer.aliases["ecma"] == "javascript"


def test_identity_alias_is_ignored():
    normalizer = SkillNormalizer(aliases={"Rust": "rust"})

    skill = normalizer.normalize("rust")

    assert skill.token == "rust"
    assert not skill.aliased


def test_alias_cycle_is_rejected():
    with pytest.raises(ValueError, match="cycle"):
        SkillNormalizer(aliases={"javascript": "js"})
