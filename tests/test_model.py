"""Tests for the World orchestration: counters, boundaries and snapshots."""

import random

import pytest

from wired_creatures_library import Genome, World, WiringUnit, create_world


def counting(world):
    """Wraps the per-step pass of `world` so the number of calls can be read back."""
    calls = []
    simulate = world.creatures.behavior.simulate

    def wrapped(population, rng):
        calls.append(1)
        simulate(population, rng)

    world.creatures.behavior.simulate = wrapped
    return calls


def test_scenario_a_one_generation_of_one_step():
    world = create_world(4, 1, 10, 10, random.Random(42), verbose=False)
    world.set_steps_in_generation(1)
    world.advance_to_generation_end()
    assert len(world.creatures.genomes) == 4
    assert len(world.export_positions()) == 4
    assert world.generation() == 1
    assert world.step() == 0


def test_world_uses_the_injected_random_source():
    rng = random.Random(1)
    world = create_world(3, 1, 10, 10, rng, verbose=False)
    assert world.random is rng
    assert isinstance(world, World)


def test_default_steps_in_generation():
    world = create_world(2, 1, 10, 10, random.Random(0), verbose=False)
    assert world.steps_in_generation() == 300


def test_advance_one_step_ends_generation_after_exceeding_limit():
    world = create_world(5, 1, 10, 10, random.Random(3), verbose=False)
    world.set_steps_in_generation(3)
    calls = counting(world)
    for expected_step in (1, 2, 3):
        world.advance_one_step()
        assert world.step() == expected_step
        assert world.generation() == 0
    world.advance_one_step()
    assert world.step() == 0
    assert world.generation() == 1
    assert len(calls) == 4


def test_advance_to_generation_end_stops_at_limit():
    world = create_world(5, 1, 10, 10, random.Random(3), verbose=False)
    world.set_steps_in_generation(3)
    calls = counting(world)
    world.advance_to_generation_end()
    assert len(calls) == 3
    assert (world.generation(), world.step()) == (1, 0)


def test_advance_to_generation_end_finishes_a_started_generation():
    world = create_world(5, 1, 10, 10, random.Random(3), verbose=False)
    world.set_steps_in_generation(5)
    calls = counting(world)
    world.advance_one_step()
    world.advance_one_step()
    world.advance_to_generation_end()
    assert len(calls) == 5
    assert (world.generation(), world.step()) == (1, 0)


def test_zero_steps_in_generation():
    world = create_world(5, 1, 10, 10, random.Random(3), steps_in_generation=0, verbose=False)
    calls = counting(world)
    world.advance_to_generation_end()
    assert len(calls) == 0
    world.advance_one_step()
    assert len(calls) == 1
    assert (world.generation(), world.step()) == (2, 0)


def test_counter_protocol_over_many_steps():
    world = create_world(30, 7, 12, 12, random.Random(5), steps_in_generation=4, verbose=False)
    last_generation = world.generation()
    for _ in range(60):
        world.advance_one_step()
        assert world.generation() >= last_generation
        if world.generation() != last_generation:
            assert world.generation() == last_generation + 1
            assert world.step() == 0
        else:
            assert world.step() > 0
        last_generation = world.generation()
        assert len(world.creatures.genomes) == len(world.creatures.positions) == 30
        for x, y in world.export_positions():
            assert 0 <= x < 12 and 0 <= y < 12
    assert world.generation() == 12


def test_set_steps_in_generation_rejects_negative():
    world = create_world(1, 1, 10, 10, random.Random(0), verbose=False)
    with pytest.raises(ValueError):
        world.set_steps_in_generation(-1)


def test_export_positions_is_a_snapshot():
    world = create_world(6, 1, 10, 10, random.Random(2), verbose=False)
    snapshot = world.export_positions()
    assert snapshot == [tuple(row) for row in world.creatures.positions.tolist()]
    assert all(isinstance(x, int) and isinstance(y, int) for x, y in snapshot)
    snapshot[0] = (-1, -1)
    assert world.export_positions()[0] != (-1, -1)


def test_scenario_c_no_parents_repopulates_randomly(capsys):
    rng = random.Random(21)
    world = create_world(4, 10 ** 12, 10, 10, rng, genome_length=5, steps_in_generation=0)
    world.creatures.replace(world.creatures.genomes, [(0, 0), (1, 3), (5, 5), (2, 9)])
    replay = random.Random()
    replay.setstate(rng.getstate())

    world.advance_to_generation_end()

    expected = [Genome.random(WiringUnit, 5, replay) for _ in range(4)]
    mutated = replay.randrange(10 ** 12)
    if mutated < 4:
        expected[mutated].mutate(replay)
    assert [[u.encoded for u in g] for g in world.creatures.genomes] == [[u.encoded for u in g] for g in expected]
    assert world.surviving_parents == 0
    assert world.last_report.repopulated is True
    assert len(world.export_positions()) == 4
    out = capsys.readouterr().out
    assert "surviving parents: 0" in out
    assert "Repopulated with 4 random genomes" in out


def test_zero_population_world():
    world = create_world(0, 1, 10, 10, random.Random(0), steps_in_generation=2, verbose=False)
    world.advance_to_generation_end()
    world.advance_one_step()
    assert world.export_positions() == []
    assert world.generation() == 1


def test_same_seed_same_run():
    worlds = [create_world(20, 3, 16, 16, random.Random(77), genome_length=4,
                           steps_in_generation=5, verbose=False) for _ in range(2)]
    for world in worlds:
        for _ in range(3):
            world.advance_to_generation_end()
        for _ in range(2):
            world.advance_one_step()
    assert worlds[0].export_positions() == worlds[1].export_positions()
    assert [str(g) for g in worlds[0].creatures.genomes] == [str(g) for g in worlds[1].creatures.genomes]


def test_datacollector_records_each_generation():
    world = create_world(8, 1, 10, 10, random.Random(4), steps_in_generation=2, verbose=False)
    world.advance_to_generation_end()
    world.advance_to_generation_end()
    model_vars = world.datacollector.model_vars
    assert model_vars["Generation"] == [1, 2]
    assert model_vars["Population"] == [8, 8]
    assert all(0 <= parents <= 8 for parents in model_vars["Surviving parents"])


def test_run_model_runs_whole_generations():
    world = create_world(8, 1, 10, 10, random.Random(4), steps_in_generation=2, verbose=False)
    world.run_model(3)
    assert (world.generation(), world.step()) == (3, 0)
    world.running = False
    world.run_model(3)
    assert world.generation() == 3


def test_details():
    world = create_world(8, 1, 12, 6, random.Random(4), steps_in_generation=9, verbose=False)
    world.advance_one_step()
    assert world.details() == {
        "generation": 0,
        "step": 1,
        "board": (12, 6),
        "steps_in_generation": 9,
        "population": 8,
    }
