import json
from pathlib import Path

from inventory_recon.application.users.use_cases import BootstrapAdminUseCase
from inventory_recon.cli import main
from inventory_recon.infrastructure.repositories.json_repositories import JsonUserRepository
from inventory_recon.infrastructure.storage.json_store import JsonKeyValueStore


def write_columns(tmp_path: Path) -> list[str]:
    files = {
        "codes": "100\n200\n",
        "warehouses": "DAGR\nMAIN\n",
        "system-quantities": "10\n4\n",
        "physical-quantities": "8\n4\n",
        "total-values": "R$ 100,00\nR$ 40,00\n",
    }
    args = []
    for name, content in files.items():
        path = tmp_path / f"{name}.txt"
        path.write_text(content, encoding="utf-8")
        args += [f"--{name}", str(path)]
    return args


def test_reconcile_prints_summary_without_saving(tmp_path: Path, capsys):
    data_dir = tmp_path / "data"

    code = main(["--data-dir", str(data_dir), "reconcile", *write_columns(tmp_path)])

    out = capsys.readouterr().out
    assert code == 0
    assert "Records: 2" in out
    assert "Accuracy: 50.0%" in out
    assert "Net divergence: -R$ 20,00" in out
    assert not (data_dir / "inventory_data.json").exists()


def test_reconcile_save_then_summary_and_exports(tmp_path: Path, capsys):
    data_dir = tmp_path / "data"
    assert main(["--data-dir", str(data_dir), "reconcile", *write_columns(tmp_path), "--save"]) == 0

    assert main(["--data-dir", str(data_dir), "summary"]) == 0
    assert "DAGR: R$ 20,00" in capsys.readouterr().out

    csv_path = tmp_path / "out.csv"
    assert main(["--data-dir", str(data_dir), "export-csv", str(csv_path)]) == 0
    assert csv_path.read_text(encoding="utf-8").splitlines()[1] == "100;;DAGR;10;8;-2;100;-20"


def test_backup_export_and_import(tmp_path: Path):
    data_dir = tmp_path / "data"
    backups = tmp_path / "backups"
    main(["--data-dir", str(data_dir), "reconcile", *write_columns(tmp_path), "--save"])
    BootstrapAdminUseCase(JsonUserRepository(JsonKeyValueStore(data_dir))).execute("boss", "pw", "Main Admin")

    assert main(["--data-dir", str(data_dir), "backup-export", str(backups)]) == 0
    [backup] = list(backups.glob("inventory_backup_*.json"))
    document = json.loads(backup.read_text(encoding="utf-8"))
    assert len(document["inventory"]) == 2
    assert [user["username"] for user in document["users"]] == ["boss"]

    other_dir = tmp_path / "other"
    assert main(["--data-dir", str(other_dir), "backup-import", str(backup)]) == 0
    stored = json.loads((other_dir / "inventory_data.json").read_text(encoding="utf-8"))
    assert [item["code"] for item in stored] == ["100", "200"]


def test_errors_exit_with_status_two(tmp_path: Path, capsys):
    empty = tmp_path / "codes.txt"
    empty.write_text("\n\n", encoding="utf-8")

    code = main(["--data-dir", str(tmp_path / "data"), "reconcile", "--codes", str(empty)])

    assert code == 2
    assert "no material codes supplied" in capsys.readouterr().err

    bad = tmp_path / "bad.json"
    bad.write_text('{"inventory": "nope"}', encoding="utf-8")
    assert main(["--data-dir", str(tmp_path / "data"), "backup-import", str(bad)]) == 2
