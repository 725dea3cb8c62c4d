"""Tests for run configuration."""

import pytest

from crossarea_mc.config import (
    ConfigurationError,
    SimulationConfig,
    load_config,
    validate_config,
)


class TestSimulationConfig:

    def test_defaults(self):
        config = SimulationConfig(n_theta_steps=10, probe_radius=1.0)

        assert config.n_phi_steps_max == 20
        assert config.seed == 0
        assert config.collision_method == 'grid'
        assert config.max_guesses is None
        assert config.min_guesses == 100
        assert config.check_interval == 100
        assert config.error_ratio_target == 0.001
        assert config.validate() == []

    def test_explicit_phi_steps(self):
        config = SimulationConfig(n_theta_steps=10, probe_radius=1.0, n_phi_steps_max=7)
        assert config.n_phi_steps_max == 7

    def test_collects_every_problem(self):
        config = SimulationConfig(n_theta_steps=0, probe_radius=-0.5, seed=-1,
                                  collision_method='octree', max_guesses=0)
        errors = config.validate()

        # n_phi_steps_max defaults to 2 * 0 and is reported too
        assert len(errors) == 6
        valid, reported = validate_config(config, raise_on_error=False)
        assert not valid
        assert reported == errors

    def test_single_theta_step_rejected(self):
        config = SimulationConfig(n_theta_steps=1, probe_radius=1.0)
        errors = config.validate()

        assert len(errors) == 1
        assert "n_theta_steps must be an integer >= 2" in errors[0]
        assert SimulationConfig(n_theta_steps=2, probe_radius=1.0).validate() == []

    def test_validate_raises(self):
        config = SimulationConfig(n_theta_steps=3, probe_radius=float('nan'))
        with pytest.raises(ConfigurationError, match="probe_radius"):
            validate_config(config)

    def test_dict_round_trip(self):
        config = SimulationConfig(n_theta_steps=5, probe_radius=1.2, seed=42)
        assert SimulationConfig.from_dict(config.to_dict()) == config

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigurationError, match="Unknown configuration keys"):
            SimulationConfig.from_dict({'n_theta_steps': 5, 'probe_radius': 1.0,
                                        'temperature': 300})

    def test_from_dict_missing_key(self):
        with pytest.raises(ConfigurationError, match="probe_radius"):
            SimulationConfig.from_dict({'n_theta_steps': 5})


class TestLoadConfig:

    def test_load(self, tmp_path):
        path = tmp_path / 'run.yaml'
        path.write_text(
            "n_theta_steps: 12\n"
            "probe_radius: 1.2\n"
            "seed: 3\n"
            "structure_file: protein.pdb\n"
            "radius_file: radii.lib\n"
        )
        data = load_config(path)

        assert data['n_theta_steps'] == 12
        assert data['structure_file'] == 'protein.pdb'

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text("")
        assert load_config(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / 'none.yaml')

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / 'list.yaml'
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / 'run.yaml'
        path.write_text("n_theta_steps: 12\nbeam_energy: 5\n")
        with pytest.raises(ConfigurationError, match="beam_energy"):
            load_config(path)

    def test_parse_error(self, tmp_path):
        path = tmp_path / 'broken.yaml'
        path.write_text("n_theta_steps: [12\n")
        with pytest.raises(ConfigurationError, match="Could not parse"):
            load_config(path)
