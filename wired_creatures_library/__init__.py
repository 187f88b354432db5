# wired_creatures_library/__init__.py

# Exposes the engine's main entry points for easier import.

from .config import (
    GRID_WIDTH, GRID_HEIGHT, DEFAULT_POPULATION_SIZE, GENOME_LENGTH,
    MUTATION_COEFF, STEPS_IN_GENERATION, CREATURE_KIND
)
from .nucleotides import Actuator, HeritableUnit, Sensor, WiringUnit
from .genome import Genome, GenomeLengthMismatch, NullScorer, StaticScore
from .agents import CREATURE_KINDS, CreatureKind, GenerationReport, WiredCreature, get_creature_kind
from .population import Population, create_population, make_positions
from .model import World, create_world

__version__ = "0.1.0"
