from pathlib import Path

from beamtable.config import (
    PipelineConfig, LayerNames, load_config, load_export_config, DEFAULT_RULES_PATH
)


def test_bundled_rules_match_defaults():
    assert DEFAULT_RULES_PATH.exists()
    config = load_config()
    assert config.layers == LayerNames()
    assert config.x_tol == 1e-3
    assert config.fallback_padding == 1000
    assert config.throughout_markers == ["(T)"]
    assert config.curtailed_markers == ["(C)", "EXTRA"]
    assert config.min_span_width == PipelineConfig().min_span_width


def test_override_file(tmp_path):
    rules = tmp_path / "rules.yaml"
    rules.write_text(
        "layers:\n"
        "  beam_id: BEAM_MARK\n"
        "  unknown_layer: X\n"
        "tolerances:\n"
        "  fallback_padding: 500\n"
        "markers:\n"
        "  curtailed: ['(C)', 'ADDL']\n"
        "output:\n"
        "  shear_legs: 4\n"
        "  formats: [JSON]\n"
        "  overlay: true\n"
    )
    config = load_config(rules)
    assert config.layers.beam_id == "BEAM_MARK"
    assert config.layers.reinforcement == "B_TEXT"
    assert config.fallback_padding == 500
    assert config.curtailed_markers == ["(C)", "ADDL"]
    assert config.throughout_markers == ["(T)"]
    assert config.shear_legs == "4"

    export = load_export_config(rules, tmp_path / "out")
    assert export.formats == ["json"]
    assert export.overlay is True
    assert export.output_dir == tmp_path / "out"


def test_missing_or_invalid_file_falls_back(tmp_path):
    assert load_config(tmp_path / "missing.yaml") == PipelineConfig()

    bad = tmp_path / "bad.yaml"
    bad.write_text("layers: [unclosed\n")
    assert load_config(bad) == PipelineConfig()

    scalar = tmp_path / "scalar.yaml"
    scalar.write_text("just a string\n")
    assert load_config(scalar) == PipelineConfig()


def test_malformed_sections_fall_back(tmp_path):
    rules = tmp_path / "rules.yaml"
    rules.write_text(
        "layers: [B_NO, B_TEXT]\n"
        "tolerances: 0.5\n"
        "markers: (T)\n"
        "output: [csv]\n"
    )
    assert load_config(rules) == PipelineConfig()

    export = load_export_config(rules)
    assert export.formats == ["csv", "xlsx"]
    assert export.reinforcement_layer == "B_TEXT"


def test_non_numeric_tolerances_keep_defaults(tmp_path):
    rules = tmp_path / "rules.yaml"
    rules.write_text(
        "tolerances:\n"
        "  x_tol: tiny\n"
        "  y_tol: [1]\n"
        "  fallback_padding: 250\n"
    )
    config = load_config(rules)
    assert config.x_tol == 1e-3
    assert config.y_tol == 1e-3
    assert config.fallback_padding == 250


def test_single_marker_string(tmp_path):
    rules = tmp_path / "rules.yaml"
    rules.write_text("markers:\n  throughout: '(CONT)'\n  curtailed: 12\n")
    config = load_config(rules)
    assert config.throughout_markers == ["(CONT)"]
    assert config.curtailed_markers == ["(C)", "EXTRA"]


def test_export_config_follows_renamed_reinforcement_layer(tmp_path):
    rules = tmp_path / "rules.yaml"
    rules.write_text("layers:\n  reinforcement: S-BAR\noutput:\n  formats: json\n")
    export = load_export_config(rules)
    assert export.reinforcement_layer == "S-BAR"
    assert export.formats == ["json"]


def test_export_defaults():
    export = load_export_config(Path("/nonexistent/rules.yaml"))
    assert export.formats == ["csv", "xlsx"]
    assert export.overlay is False
