# wired_creatures_library/agents.py
from collections import namedtuple

import numpy as np

from .config import MOVE_THRESHOLD, VERTICAL_CHECK_USES_HORIZONTAL
from .evolution import breed_offspring, repopulate_randomly, select_parents
from .nucleotides import Actuator, Sensor, WiringUnit

# What happened at a generation boundary, reported back to the World.
GenerationReport = namedtuple("GenerationReport", ["surviving_parents", "repopulated", "mutated_index"])


class CreatureKind:
    """
    Behavior of one kind of creature: which heritable unit its genomes are
    made of, how a genome drives the creature on every step, and how the next
    generation is bred. A population picks its kind once, when it is created.
    """
    unit_type = None

    def simulate(self, population, rng):
        """Runs one step for every creature of `population`."""
        raise NotImplementedError

    def simulate_end(self, population, rng):
        """
        Selection and reproduction at the end of a generation.

        Returns:
            tuple: (list of new genomes, number of surviving parents)
        """
        raise NotImplementedError

    def end_generation(self, population, rng):
        """
        Replaces the population with the next generation: breeds it via
        simulate_end, gives it at most one mutation and respawns everyone.

        Returns:
            GenerationReport: Parent count, whether the random fallback was
            used and the index of the mutated genome (or None).
        """
        n = len(population.genomes)
        genomes, surviving_parents = self.simulate_end(population, rng)

        mutated_index = rng.randrange(population.mutation_coeff)
        if mutated_index < n:
            genomes[mutated_index].mutate(rng)
        else:
            mutated_index = None

        population.replace(genomes, population.respawn(rng))
        return GenerationReport(surviving_parents, surviving_parents == 0 and n > 0, mutated_index)


class WiredCreature(CreatureKind):
    """
    A creature whose genome is a list of WiringUnits, each one connecting a
    sensor to an actuator with a weight in [0, 1). Actuator inputs are summed,
    squashed with tanh and turned into at most one horizontal and one
    vertical move per step.
    """
    unit_type = WiringUnit

    def __init__(self, move_threshold=MOVE_THRESHOLD,
                 vertical_check_uses_horizontal=VERTICAL_CHECK_USES_HORIZONTAL):
        """
        Args:
            move_threshold (float): Intent needed to queue a move.
            vertical_check_uses_horizontal (bool): The north move is decided by
                the horizontal intent (historical behavior) instead of the
                vertical one.
        """
        self.move_threshold = move_threshold
        self.vertical_check_uses_horizontal = vertical_check_uses_horizontal

    def simulate(self, population, rng):
        half = population.width // 2
        threshold = self.move_threshold
        uses_horizontal = self.vertical_check_uses_horizontal
        neurons = np.zeros(len(Actuator))
        # Moves are only applied once every creature has decided.
        deltas = np.zeros_like(population.positions)
        xs = population.positions[:, 0].tolist()

        for i, (genome, x) in enumerate(zip(population.genomes, xs)):
            neurons[:] = 0.0
            for unit in genome.units:
                sensor = unit.sensor()
                if sensor is Sensor.OSCILLATOR:
                    signal = rng.uniform(-1.0, 1.0)
                elif sensor is Sensor.LEFT_HALF:
                    signal = 1.0 if x < half else 0.0
                elif sensor is Sensor.RIGHT_HALF:
                    signal = 1.0 if x >= half else 0.0
                else:
                    signal = 0.0
                neurons[unit.actuator()] += signal * unit.weight()
            np.tanh(neurons, out=neurons)

            horizontal = neurons[Actuator.MOVE_WEST] - neurons[Actuator.MOVE_EAST]
            vertical = neurons[Actuator.MOVE_SOUTH] - neurons[Actuator.MOVE_NORTH]

            if horizontal > threshold:
                deltas[i, 0] = -1 # west
            elif horizontal < -threshold:
                deltas[i, 0] = 1 # east
            if vertical > threshold:
                deltas[i, 1] = -1 # south
            elif (horizontal if uses_horizontal else vertical) < -threshold:
                deltas[i, 1] = 1 # north

        population.move(deltas)

    def simulate_end(self, population, rng):
        n = len(population.genomes)
        parents = select_parents(population.genomes, population.positions, population.width)
        if parents:
            genomes = breed_offspring(parents, n, rng)
        else:
            genomes = repopulate_randomly(self.unit_type, n, population.genome_length, rng)
        return genomes, len(parents)


CREATURE_KINDS = {
    "wired": WiredCreature,
}


def get_creature_kind(kind, **options):
    """
    Instantiates the behavior registered under `kind`.

    Raises:
        ValueError: If no such creature kind exists.
    """
    try:
        kind_class = CREATURE_KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown creature kind '{kind}'. Known kinds: {sorted(CREATURE_KINDS)}") from None
    return kind_class(**options)
