"""End-to-end: files on disk through the CLI composition root and through pylint."""

import json
import sys
from pathlib import Path

import astroid
import pytest
from pylint.lint import Run
from pylint.reporters import CollectingReporter

from piranha_analyzers.__main__ import main
from piranha_analyzers.infrastructure.di.container import PiranhaContainer
from piranha_analyzers.infrastructure.gateways.compilation import Compilation
from tests.piranha_stubs import MODELS_HEADER, PIRANHA_EXTEND, PIRANHA_FIELDS

MODELS = MODELS_HEADER + """
class Caption:
    text: Annotated[StringField, FieldAttribute()]


class Teaser:
    title: Annotated[StringField, FieldAttribute()]
    image: Annotated[ImageField, FieldAttribute()]


class Gallery:
    caption: Annotated[Caption, RegionAttribute(title="Caption")]
    teaser: Annotated[Teaser, RegionAttribute(title="Teaser")]


class StartPage:
    hero: Annotated[StringField, RegionAttribute(title="Hero")]
    intro: Annotated[Optional[NumberField], RegionAttribute(title="Intro")]
"""


def _write_piranha(root: Path) -> None:
    extend = root / "piranha" / "extend"
    extend.mkdir(parents=True)
    (root / "piranha" / "__init__.py").write_text("")
    (extend / "__init__.py").write_text(PIRANHA_EXTEND)
    (extend / "fields.py").write_text(PIRANHA_FIELDS)


@pytest.fixture
def site(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A project with an on-disk piranha package and a cms package using it."""
    _write_piranha(tmp_path)

    cms = tmp_path / "cms"
    cms.mkdir()
    (cms / "__init__.py").write_text("")
    (cms / "models.py").write_text(MODELS)
    (cms / "generated.py").write_text("# <auto-generated />\n" + MODELS)
    (cms / "broken.py").write_text("class Broken(:\n")

    monkeypatch.chdir(tmp_path)
    monkeypatch.syspath_prepend(str(tmp_path))
    # Earlier failed lookups of `piranha` must not stick.
    astroid.MANAGER.clear_cache()
    return tmp_path


def _run_main(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["piranha-analyzers", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def test_cli_reports_both_rules(site: Path, monkeypatch, capsys) -> None:
    code = _run_main(monkeypatch, "check", str(site), "--format", "json")

    data = json.loads(capsys.readouterr().out)
    found = sorted(
        (d["rule_id"], Path(d["path"]).name, d["line"]) for d in data["diagnostics"]
    )
    assert found == [
        ("PA0001", "models.py", 25),
        ("PA0001", "models.py", 26),
        ("PA0002", "models.py", 20),
    ]
    assert code == 1

    units = {Path(u["path"]).name: u for u in data["units"] if u["path"].startswith(str(site / "cms"))}
    assert units["generated.py"]["skipped"]
    assert units["generated.py"]["reason"] == "generated"
    assert units["broken.py"]["skipped"]


def test_cli_messages_name_field_types(site: Path, monkeypatch, capsys) -> None:
    _run_main(monkeypatch, "check", str(site / "cms"), str(site / "piranha"), "--jobs", "2")
    out = capsys.readouterr().out
    assert "Field type 'StringField'" in out
    assert "Field type 'NumberField'" in out
    assert "PA0002 error: Complex region contains only one field" in out


def test_cli_honours_configuration(site: Path, monkeypatch, capsys) -> None:
    (site / "pyproject.toml").write_text(
        '[tool.piranha-analyzers]\ndisable = ["PA0002"]\nanalyze_generated = true\n'
    )
    code = _run_main(monkeypatch, "check", str(site), "--format", "json")

    data = json.loads(capsys.readouterr().out)
    rule_ids = [d["rule_id"] for d in data["diagnostics"]]
    assert rule_ids == ["PA0001"] * 4
    assert code == 0


def test_cli_invalid_configuration_exits_two(site: Path, monkeypatch, capsys) -> None:
    (site / "pyproject.toml").write_text('[tool.piranha-analyzers]\ndisable = ["PA0003"]\n')
    code = _run_main(monkeypatch, "check", str(site))
    assert code == 2
    assert "PA0003" in capsys.readouterr().err


def test_pylint_plugin(site: Path) -> None:
    reporter = CollectingReporter()
    Run(
        [
            "--load-plugins=piranha_analyzers.checker",
            "--disable=all",
            "--enable=non-single-field-region,invalid-single-field-complex-region",
            "--persistent=n",
            str(site / "cms" / "models.py"),
        ],
        reporter=reporter,
        exit=False,
    )
    found = sorted((m.msg_id, m.line) for m in reporter.messages)
    assert found == [("E9502", 20), ("W9501", 25), ("W9501", 26)]


def _gallery(field_count: int) -> str:
    fields = "".join(
        f"    text_{index}: Annotated[StringField, FieldAttribute()]\n"
        for index in range(field_count)
    )
    return MODELS_HEADER + f"""
class Caption:
{fields}

class Gallery:
    caption: Annotated[Caption, RegionAttribute()]
"""


@pytest.mark.parametrize(("blog_fields", "shop_fields"), [(2, 1), (1, 2)])
def test_same_named_modules_keep_their_own_regions(
    tmp_path: Path, blog_fields: int, shop_fields: int
) -> None:
    _write_piranha(tmp_path)
    for name, count in (("blog", blog_fields), ("shop", shop_fields)):
        (tmp_path / name).mkdir()
        (tmp_path / name / "models.py").write_text(_gallery(count))

    use_case = PiranhaContainer({}).get_analyze_use_case()
    with Compilation.from_paths([tmp_path]) as compilation:
        report = use_case.execute(compilation)

    found = {
        Path(unit.path).parent.name: [d.rule_id for d in unit.diagnostics]
        for unit in report.units
        if Path(unit.path).name == "models.py"
    }
    assert found == {
        "blog": ["PA0002"] if blog_fields == 1 else [],
        "shop": ["PA0002"] if shop_fields == 1 else [],
    }
