# wired_creatures_library/model.py
from mesa import DataCollector, Model

from .config import (CREATURE_KIND, GENOME_LENGTH, REPORT_SURVIVING_PARENTS,
                     STEPS_IN_GENERATION)
from .population import create_population


class World(Model):
    """
    The Mesa model driving the simulation. It owns the population, the random
    stream (Mesa's `self.random`), the board size and the step/generation
    counters, and moves them through the step / generation-end cycle.
    Drawing is left to the caller, which reads `export_positions()` and the
    counters.
    """
    def __init__(self, population_size, mutation_coeff, width, height, random_source,
                 genome_length=GENOME_LENGTH, kind=CREATURE_KIND,
                 steps_in_generation=STEPS_IN_GENERATION,
                 verbose=REPORT_SURVIVING_PARENTS, **behavior_options):
        """
        Initializes the World.

        Args:
            population_size (int): Number of creatures, each with its own genome.
            mutation_coeff (int): A generation gets a mutation with probability
                min(1, population_size / mutation_coeff).
            width (int): Board width.
            height (int): Board height.
            random_source (random.Random): The only source of randomness of the run.
            genome_length (int, optional): Loci per genome.
            kind (str, optional): Creature kind, see agents.CREATURE_KINDS.
            steps_in_generation (int, optional): Steps before selection happens.
            verbose (bool, optional): Print the surviving parents at every boundary.
            **behavior_options: Passed to the creature kind.
        """
        super().__init__() # Initialize the base Mesa Model class
        self.random = random_source # Every draw of the run comes from here
        self.width = width
        self.height = height
        self.verbose = verbose
        self.creatures = create_population(population_size, mutation_coeff, width, height,
                                           self.random, genome_length=genome_length, kind=kind,
                                           **behavior_options)
        self._step = 0
        self._generation = 0
        self._steps_in_generation = 0
        self.set_steps_in_generation(steps_in_generation)
        self.surviving_parents = None
        self.last_report = None

        self.datacollector = DataCollector(model_reporters={
            "Generation": lambda m: m.generation(),
            "Surviving parents": lambda m: m.surviving_parents,
            "Population": lambda m: len(m.creatures),
        })

    # --- simulation ---

    def advance_one_step(self):
        """Simulates one step; the generation ends once the step count exceeds the limit."""
        self.creatures.behavior.simulate(self.creatures, self.random)
        self._step += 1

        if self._step > self._steps_in_generation:
            self._step = 0
            self._generation += 1
            self._end_generation()

    def advance_to_generation_end(self):
        """Simulates the remaining steps of the current generation, then ends it."""
        while self._step < self._steps_in_generation:
            self.creatures.behavior.simulate(self.creatures, self.random)
            self._step += 1
        self._step = 0
        self._generation += 1
        self._end_generation()

    def _end_generation(self):
        report = self.creatures.behavior.end_generation(self.creatures, self.random)
        self.last_report = report
        self.surviving_parents = report.surviving_parents
        if self.verbose:
            print(f"surviving parents: {report.surviving_parents}")
            if report.repopulated:
                print(f"No parents left in generation {self._generation}. "
                      f"Repopulated with {len(self.creatures)} random genomes.")
        self.datacollector.collect(self)

    def run_model(self, generations=1):
        """Runs whole generations while the model is running."""
        for _ in range(generations):
            if not self.running:
                break
            self.advance_to_generation_end()

    # --- properties ---

    def generation(self):
        return self._generation

    def step(self):
        """Current step within the generation (a counter, it does not advance the model)."""
        return self._step

    def steps_in_generation(self):
        return self._steps_in_generation

    def set_steps_in_generation(self, steps):
        if steps < 0:
            raise ValueError(f"steps_in_generation must be non-negative, got {steps}")
        self._steps_in_generation = steps

    def export_positions(self):
        """Snapshot of all (x, y) positions, in creature order, for drawing."""
        return [(x, y) for x, y in self.creatures.positions.tolist()]

    def details(self):
        """The numbers a side panel shows about the running simulation."""
        return {
            "generation": self._generation,
            "step": self._step,
            "board": (self.width, self.height),
            "steps_in_generation": self._steps_in_generation,
            "population": len(self.creatures),
        }


def create_world(population_size, mutation_coeff, width, height, random_source, **options):
    """Creates a World; `options` are the keyword arguments of World."""
    return World(population_size, mutation_coeff, width, height, random_source, **options)
