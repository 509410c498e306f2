from pathlib import Path

from csq_annotate.cli import build_config, main, parse_args


def test_cli_flags_override_config_file(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "annotation:\n  tag_name: old\n  table_path: genes.tsv\n  key_index: 4\n",
        encoding="utf-8",
    )

    args = parse_args(["pLI", "other.tsv", "--config", str(config_file), "--key-index", "3"])
    config = build_config(args)

    assert config["annotation"]["tag_name"] == "pLI"
    assert config["annotation"]["table_path"] == "other.tsv"
    assert config["annotation"]["key_index"] == 3
    assert "io" not in config


def test_main_annotates_file(tmp_path: Path) -> None:
    table_file = tmp_path / "genes.tsv"
    table_file.write_text("ENSG1\tHIGH_PLI\n", encoding="utf-8")
    vcf_in = tmp_path / "in.vcf"
    vcf_in.write_text(
        "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
        "1\t100\t.\tA\tG\t50\tPASS\tCSQ=G|x|HIGH|S1|ENSG1\n",
        encoding="utf-8",
    )
    vcf_out = tmp_path / "out.vcf"

    exit_code = main(["pLI", str(table_file), "-i", str(vcf_in), "-o", str(vcf_out)])

    assert exit_code == 0
    assert vcf_out.read_text(encoding="utf-8").splitlines()[1].endswith("CSQ=G|x|HIGH|S1|ENSG1|HIGH_PLI")


def test_main_reports_missing_table(tmp_path: Path) -> None:
    assert main(["pLI", str(tmp_path / "missing.tsv"), "-i", str(tmp_path / "in.vcf")]) == 1


def test_main_passes_undecodable_bytes_through(tmp_path: Path) -> None:
    table_file = tmp_path / "genes.tsv"
    table_file.write_text("ENSG1\tHIGH_PLI\n", encoding="utf-8")
    vcf_in = tmp_path / "in.vcf"
    vcf_in.write_bytes(
        b"#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
        b"1\t100\t.\tA\tG\t50\tPASS\tNOTE=caf\xe9;CSQ=G|x|HIGH|S1|ENSG1\n"
    )
    vcf_out = tmp_path / "out.vcf"

    exit_code = main(["pLI", str(table_file), "-i", str(vcf_in), "-o", str(vcf_out)])

    assert exit_code == 0
    assert vcf_out.read_bytes().splitlines()[1].endswith(
        b"NOTE=caf\xe9;CSQ=G|x|HIGH|S1|ENSG1|HIGH_PLI"
    )
