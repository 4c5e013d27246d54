"""
Tests for the command-line runner.
"""
import json

import pytest
from trilateration.runner import (
    EXIT_ERROR,
    EXIT_NOT_READY,
    EXIT_OK,
    build_parser,
    main,
    resolve_config,
)
from trilateration.utils.exceptions import ConfigurationError

POINT_ARGS = [
    '--point', '0.0', '9.998', '0.2279422',
    '--point', '0.0', '10.002', '0.2279422',
    '--point', '0.002', '10.0', '0.2279422',
]


def _stdout_json(capsys):
    out = capsys.readouterr().out
    return json.loads(out.strip().splitlines()[-1])


class TestMain:
    """End-to-end tests through main()."""

    def test_points_on_command_line(self, capsys):
        """Three --point options print the located point."""
        assert main(POINT_ARGS) == EXIT_OK

        result = _stdout_json(capsys)
        assert result['lat'] == pytest.approx(0.0, abs=1e-4)
        assert result['lng'] == pytest.approx(10.0, abs=1e-4)

    def test_two_points_not_ready(self, capsys):
        """Fewer than three anchors exits with the not-ready code."""
        assert main(POINT_ARGS[:8]) == EXIT_NOT_READY

        assert _stdout_json(capsys) == {'error': 'not_ready', 'anchors': 2}

    def test_degenerate_anchors(self, capsys):
        """Coincident anchors fail with the error code and print nothing."""
        argv = [
            '--point', '0.0', '10.0', '0.1',
            '--point', '0.0', '10.0', '0.2',
            '--point', '0.002', '10.0', '0.2',
        ]
        assert main(argv) == EXIT_ERROR
        assert capsys.readouterr().out == ''

    def test_no_intersection(self):
        """Radii that never meet fail with the error code."""
        argv = [
            '--point', '0.0', '9.998', '0.001',
            '--point', '0.0', '10.002', '0.001',
            '--point', '0.002', '10.0', '0.001',
        ]
        assert main(argv) == EXIT_ERROR

    def test_invalid_point(self):
        """Out-of-range anchors are a configuration error."""
        argv = ['--point', '95.0', '10.0', '0.1'] + POINT_ARGS[4:]
        assert main(argv) == EXIT_ERROR

    def test_config_file(self, tmp_path, capsys):
        """Anchors can come from a YAML config file."""
        config_file = tmp_path / "problem.yaml"
        config_file.write_text(
            "logging:\n"
            "  level: ERROR\n"
            "anchors:\n"
            "  - {latitude: 0.0, longitude: 9.998, distance: 0.2279422}\n"
            "  - {latitude: 0.0, longitude: 10.002, distance: 0.2279422}\n"
            "  - {latitude: 0.002, longitude: 10.0, distance: 0.2279422}\n"
        )

        assert main(['--config', str(config_file)]) == EXIT_OK

        result = _stdout_json(capsys)
        assert result['lng'] == pytest.approx(10.0, abs=1e-4)

    def test_missing_config_file(self, tmp_path):
        """A missing config file fails with the error code."""
        assert main(['--config', str(tmp_path / "missing.yaml")]) == EXIT_ERROR

    def test_miles(self, capsys):
        """--miles converts distances before solving."""
        radius_miles = str(0.2279422 / 1.609344)
        argv = ['--miles']
        for lat, lng in (('0.0', '9.998'), ('0.0', '10.002'), ('0.002', '10.0')):
            argv += ['--point', lat, lng, radius_miles]

        assert main(argv) == EXIT_OK

        result = _stdout_json(capsys)
        assert result['lat'] == pytest.approx(0.0, abs=1e-4)
        assert result['lng'] == pytest.approx(10.0, abs=1e-4)

    def test_log_file(self, tmp_path):
        """Debug logs can be written to a file."""
        log_file = tmp_path / "run.log"

        assert main(POINT_ARGS + ['--log-level', 'DEBUG', '--log-file', str(log_file)]) == EXIT_OK

        assert "intersection_computed" in log_file.read_text()


class TestResolveConfig:
    """Tests for merging config files with command-line overrides."""

    def test_defaults(self):
        """No options give the default configuration."""
        config = resolve_config(build_parser().parse_args([]))

        assert config.anchors == []
        assert config.solver.use_miles is False
        assert config.logging.level == 'WARNING'

    def test_points_override_config_anchors(self, tmp_path):
        """--point replaces anchors from the file; other sections are kept."""
        config_file = tmp_path / "problem.yaml"
        config_file.write_text(
            "solver:\n"
            "  earth_radius_km: 6378.137\n"
            "anchors:\n"
            "  - {latitude: 1.0, longitude: 1.0, distance: 1.0}\n"
        )
        args = build_parser().parse_args(['--config', str(config_file)] + POINT_ARGS)

        config = resolve_config(args)

        assert config.solver.earth_radius_km == 6378.137
        assert len(config.anchors) == 3
        assert config.anchors[0].longitude == 9.998

    def test_overrides(self):
        """Unit, radius and logging flags override the config."""
        args = build_parser().parse_args([
            '--miles', '--earth-radius', '3958.8', '--log-level', 'DEBUG', '--json-logs',
        ])

        config = resolve_config(args)

        assert config.solver.use_miles is True
        assert config.solver.earth_radius_km == 3958.8
        assert config.logging.level == 'DEBUG'
        assert config.logging.json_output is True

    def test_invalid_earth_radius(self):
        """A non-positive radius is rejected."""
        args = build_parser().parse_args(['--earth-radius', '0'])

        with pytest.raises(ConfigurationError):
            resolve_config(args)

    def test_too_many_points(self):
        """More than three --point options are rejected."""
        args = build_parser().parse_args(POINT_ARGS + ['--point', '1.0', '1.0', '1.0'])

        with pytest.raises(ConfigurationError):
            resolve_config(args)
