from __future__ import annotations

from repo_resume.services.ai_content import (
    ExperiencePayload,
    ProjectPayload,
    SkillsPayload,
    parse_experience_list,
    parse_project_list,
)


class TestSkillsPayload:
    def test_valid_categories(self) -> None:
        payload = SkillsPayload.model_validate(
            {"technical": ["Python", " Go "], "frameworks": ["Flask"], "tools": [], "databases": ["Redis"]}
        )

        assert payload.technical == ["Python", "Go"]
        assert payload.frameworks == ["Flask"]
        assert payload.tools == []
        assert payload.databases == ["Redis"]
        assert not payload.is_empty()

    def test_wrong_shapes_become_absent(self) -> None:
        payload = SkillsPayload.model_validate(
            {"technical": "Python", "frameworks": ["React", 3, None, ""], "extra": True}
        )

        assert payload.technical is None
        assert payload.frameworks == ["React"]
        assert payload.tools is None
        assert payload.databases is None

    def test_empty_payload(self) -> None:
        assert SkillsPayload.model_validate({}).is_empty()
        assert SkillsPayload.model_validate({"technical": [], "tools": "x"}).is_empty()


class TestExperiencePayload:
    def test_camel_case_project_name(self) -> None:
        entry = ExperiencePayload.from_raw(
            {
                "projectName": "demo",
                "description": "Built it",
                "achievements": ["Shipped v1"],
                "technologies": ["Rust"],
                "duration": "2024-01-01 - 2024-02-01",
            }
        )

        assert entry is not None
        assert entry.project_name == "demo"
        assert entry.achievements == ["Shipped v1"]

    def test_non_mapping_is_rejected(self) -> None:
        assert ExperiencePayload.from_raw("demo") is None

    def test_invalid_fields_are_dropped(self) -> None:
        entry = ExperiencePayload.from_raw({"project_name": "x", "achievements": "one", "duration": 5})

        assert entry is not None
        assert entry.achievements is None
        assert entry.duration is None


def test_parse_experience_list_filters_entries() -> None:
    raw = [{"projectName": "kept"}, {"description": "no name"}, "junk", {"projectName": "  "}]

    entries = parse_experience_list(raw)

    assert [e.project_name for e in entries] == ["kept"]
    assert parse_experience_list({"projectName": "not a list"}) == []


def test_parse_project_list_filters_entries() -> None:
    raw = [
        {"name": "api", "technologies": ["Go"], "url": "https://github.com/a/api"},
        {"name": None},
        42,
    ]

    projects = parse_project_list(raw)

    assert len(projects) == 1
    assert projects[0] == ProjectPayload(
        name="api", technologies=["Go"], url="https://github.com/a/api"
    )
