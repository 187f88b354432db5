# wired_creatures_library/population.py
import numpy as np

from .agents import get_creature_kind
from .config import GENOME_LENGTH, CREATURE_KIND
from .genome import Genome


def make_positions(n, width, height, rng):
    """
    Draws `n` independent, uniform positions on the board.
    x is drawn before y for every creature, creature after creature.

    Returns:
        numpy.ndarray: Integer array of shape (n, 2) holding (x, y) rows.
    """
    positions = np.zeros((n, 2), dtype=np.int64)
    for i in range(n):
        positions[i, 0] = rng.randrange(width)
        positions[i, 1] = rng.randrange(height)
    return positions


def _check_settings(mutation_coeff, width, height, genome_length):
    if mutation_coeff < 1:
        raise ValueError(f"mutation_coeff must be at least 1, got {mutation_coeff}")
    if width < 1 or height < 1:
        raise ValueError(f"board must be at least 1x1, got {width}x{height}")
    if genome_length < 1:
        raise ValueError(f"genome_length must be at least 1, got {genome_length}")


class Population:
    """
    The creatures of one generation: index-aligned genomes and board positions,
    plus the mutation coefficient used at generation boundaries.
    """
    def __init__(self, genomes, positions, mutation_coeff, width, height,
                 genome_length=None, kind=CREATURE_KIND, **behavior_options):
        """
        Args:
            genomes (list): One Genome per creature.
            positions (array-like): (n, 2) integer (x, y) positions.
            mutation_coeff (int): A generation gets a mutation with probability
                min(1, n / mutation_coeff).
            width (int): Board width.
            height (int): Board height.
            genome_length (int, optional): Loci per genome, taken from the first
                genome (or config.GENOME_LENGTH) if not given.
            kind (str): Creature kind, a key of agents.CREATURE_KINDS.
            **behavior_options: Passed to the creature kind, e.g.
                vertical_check_uses_horizontal.
        """
        if genome_length is None:
            genome_length = len(genomes[0]) if genomes else GENOME_LENGTH
        _check_settings(mutation_coeff, width, height, genome_length)

        self.behavior = get_creature_kind(kind, **behavior_options)
        self.kind = kind
        self.mutation_coeff = mutation_coeff
        self.width = width
        self.height = height
        self.genome_length = genome_length
        self.genomes = []
        self.positions = np.zeros((0, 2), dtype=np.int64)
        self.replace(genomes, positions)

    @property
    def unit_type(self):
        return self.behavior.unit_type

    def __len__(self):
        return len(self.genomes)

    def replace(self, genomes, positions):
        """Swaps in a new generation; genomes and positions are replaced together."""
        positions = np.asarray(positions, dtype=np.int64).reshape(-1, 2)
        if len(genomes) != len(positions):
            raise ValueError(
                f"genomes and positions must align: {len(genomes)} != {len(positions)}")
        if len(positions) and (
                positions[:, 0].min() < 0 or positions[:, 0].max() >= self.width or
                positions[:, 1].min() < 0 or positions[:, 1].max() >= self.height):
            raise ValueError(f"positions must lie on the {self.width}x{self.height} board")
        if any(len(genome) != self.genome_length for genome in genomes):
            raise ValueError(f"every genome must have {self.genome_length} loci")
        self.genomes = list(genomes)
        self.positions = positions.copy()

    def move(self, deltas):
        """Applies per-creature (dx, dy) steps, then clamps everyone onto the board."""
        self.positions += deltas
        np.clip(self.positions[:, 0], 0, self.width - 1, out=self.positions[:, 0])
        np.clip(self.positions[:, 1], 0, self.height - 1, out=self.positions[:, 1])

    def respawn(self, rng):
        """Fresh positions for every creature; nothing spatial survives a generation."""
        return make_positions(len(self.genomes), self.width, self.height, rng)


def create_population(population_size, mutation_coeff, width, height, random_source,
                      genome_length=GENOME_LENGTH, kind=CREATURE_KIND, **behavior_options):
    """
    Creates a population of random genomes at random positions.

    Args:
        population_size (int): Number of creatures (= number of genomes).
        mutation_coeff (int): Controls the mutation rate, see Population.
        width (int): Board width.
        height (int): Board height.
        random_source (random.Random): The simulation's random stream.
        genome_length (int): Loci per genome.
        kind (str): Creature kind, selects heritable unit and behavior.
        **behavior_options: Passed to the creature kind.

    Returns:
        Population: The new population.
    """
    if population_size < 0:
        raise ValueError(f"population_size must be non-negative, got {population_size}")
    _check_settings(mutation_coeff, width, height, genome_length)
    unit_type = get_creature_kind(kind, **behavior_options).unit_type
    genomes = [Genome.random(unit_type, genome_length, random_source) for _ in range(population_size)]
    positions = make_positions(population_size, width, height, random_source)
    return Population(genomes, positions, mutation_coeff, width, height,
                      genome_length=genome_length, kind=kind, **behavior_options)
