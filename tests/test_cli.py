"""Tests for the command-line interface."""

from pathlib import Path

import pytest

from roadworld.cli import main
from roadworld.terrain.persistence import load_world, save_world


@pytest.fixture
def saved_world(tmp_path: Path, make_world, make_settlement, make_resource) -> Path:
    """Saved plains world with a settlement and a resource node 10 tiles apart."""
    world = make_world(["............", "............", "............"])
    world.settlements.append(make_settlement(1, 1, 1))
    world.resources.append(make_resource(1, 11, 1))
    path = tmp_path / "world.npz"
    save_world(path, world)
    return path


class TestGenerateCommand:
    """Tests for 'generate'."""

    def test_generate_writes_world(self, tmp_path: Path) -> None:
        config_path = tmp_path / "small.toml"
        config_path.write_text(
            "[world.noise]\n"
            "elevation_scale = 0.06\n"
            "moisture_scale = 0.06\n"
            "elevation_bias = 0.0\n"
            "\n"
            "[world.settlements]\n"
            "count = 4\n"
            "\n"
            "[world.resources]\n"
            "count = 4\n"
        )
        output = tmp_path / "out" / "world.npz"

        exit_code = main([
            "generate",
            "--config", str(config_path),
            "--width", "64",
            "--height", "48",
            "--seed", "11",
            "--output", str(output),
        ])

        assert exit_code == 0
        world = load_world(output)
        assert (world.width, world.height) == (64, 48)
        assert world.seed == 11
        assert world.roads == []


class TestRoadCommand:
    """Tests for 'road'."""

    def test_builds_road(self, saved_world: Path) -> None:
        exit_code = main([
            "road", str(saved_world), "--from", "settlement:1", "--to", "resource:1",
        ])

        assert exit_code == 0
        world = load_world(saved_world)
        assert len(world.roads) == 1
        assert len(world.roads[0].path) == 11

    def test_second_road_gets_next_id(self, saved_world: Path) -> None:
        main(["road", str(saved_world), "--from", "settlement:1", "--to", "resource:1"])
        main(["road", str(saved_world), "--from", "resource:1", "--to", "settlement:1"])

        world = load_world(saved_world)
        assert [road.id for road in world.roads] == [1, 2]

    def test_unknown_id(self, saved_world: Path) -> None:
        exit_code = main([
            "road", str(saved_world), "--from", "settlement:9", "--to", "resource:1",
        ])
        assert exit_code == 1

    def test_same_endpoint_rejected(self, saved_world: Path) -> None:
        exit_code = main([
            "road", str(saved_world), "--from", "settlement:1", "--to", "settlement:1",
        ])
        assert exit_code == 1
        assert load_world(saved_world).roads == []

    def test_bad_endpoint_syntax(self, saved_world: Path) -> None:
        with pytest.raises(SystemExit):
            main(["road", str(saved_world), "--from", "town1", "--to", "resource:1"])
