from pathlib import Path

import pytest

from vcard_csv import launcher
from vcard_csv.config import Settings
from vcard_csv.model import Mode


def test_pick_files_filters_non_vcf(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.vcf").write_text("")
    (tmp_path / "b.txt").write_text("")
    monkeypatch.setattr(launcher.Prompt, "ask", lambda *a, **k: "*.vcf, *.txt")

    files = launcher._pick_files("Convert which vCard file(s)?")

    assert files == [Path("a.vcf")]


def test_convert_files_uses_settings(tmp_path: Path):
    src = tmp_path / "phone.vcf"
    src.write_text("BEGIN:VCARD\nFN:Ann Lee\nNOTE:say \"hi\"\nEND:VCARD\n", encoding="utf-8")
    settings = Settings(output_suffix="-export")

    outcomes = launcher._convert_files([src], Mode.DYNAMIC, settings, tmp_path / "out")

    assert outcomes[0].result.count == 1
    out = tmp_path / "out" / "phone-export.csv"
    assert outcomes[0].out_path == out
    assert out.read_text(encoding="utf-8").split("\n") == [
        "First Name,Last Name,Notes",
        '"Ann","Lee","say ""hi"""',
    ]


def test_convert_files_skips_unreadable(tmp_path: Path):
    good = tmp_path / "good.vcf"
    good.write_text("BEGIN:VCARD\nFN:Ann Lee\nEND:VCARD\n", encoding="utf-8")
    missing = tmp_path / "gone.vcf"

    outcomes = launcher._convert_files([missing, good], Mode.FIXED, Settings(), tmp_path / "out")

    assert [o.source for o in outcomes] == [good]
    assert (tmp_path / "out" / "good_contacts.csv").exists()
    assert not (tmp_path / "out" / "gone_contacts.csv").exists()
