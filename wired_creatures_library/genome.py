# wired_creatures_library/genome.py
from .config import GENOME_DISPLAY_LIMIT


class GenomeLengthMismatch(ValueError):
    """Raised when a genetic operator is given parents of different lengths."""


class NullScorer:
    def score(self):
        return 0.0


class StaticScore:
    """A scorer holding a precomputed fitness value."""
    def __init__(self, value):
        self.value = float(value)

    def score(self):
        return self.value


def _check_same_length(a, b):
    if len(a.units) != len(b.units):
        raise GenomeLengthMismatch(
            f"parent genomes differ in length: {len(a.units)} != {len(b.units)}")


class Genome:
    """
    An ordered, fixed-length string of heritable units, e.g. `ABBCDABABD`.

    Provides the constructors used by the simulation (random, empty buffer,
    copy of a previous generation, from given units) and the genetic operators
    crossover and mutation. The operators only rely on the HeritableUnit
    capability of `unit_type`, so any unit implementation can be plugged in.
    """

    def __init__(self, unit_type, units=None, scorer=None):
        """
        Args:
            unit_type (type): HeritableUnit subclass the genome is made of.
            units (list, optional): The units, taken over without copying.
            scorer (optional): Object with a `score()` method, attached by an
                external fitness process.
        """
        self.unit_type = unit_type
        self.units = units if units is not None else []
        self.scorer = scorer

    # --- initialisation ---

    @classmethod
    def random(cls, unit_type, n, rng):
        """Random initialisation, the main way to create a new population."""
        return cls(unit_type, [unit_type.random(rng) for _ in range(n)])

    @classmethod
    def with_capacity(cls, unit_type):
        """An empty genome meant to be filled by crossover_into."""
        return cls(unit_type, [])

    @classmethod
    def from_previous(cls, other):
        """Copies the units of a previous generation's genome, without its score."""
        return cls(other.unit_type, [unit.copy() for unit in other.units])

    @classmethod
    def from_units(cls, unit_type, units):
        return cls(unit_type, list(units))

    # --- genetic operators ---

    @classmethod
    def crossover(cls, a, b, rng):
        """
        The two genomes `AAAAAAAA` and `BBBBBBBB` give birth to `A'A'A'B'B'B'B'B'`,
        where the cut point is drawn at random, `A' = crossover(A, B)` and
        `B' = crossover(B, A)` on the unit level.
        """
        _check_same_length(a, b)
        child = cls.with_capacity(a.unit_type)
        cls._fill_crossover(a, b, child.units, rng)
        return child

    @classmethod
    def crossover_into(cls, a, b, target, rng):
        """
        Same result as `crossover(a, b, rng)` for the same draws, written into
        `target` so its list can be reused from generation to generation.
        """
        _check_same_length(a, b)
        target.units.clear()
        target.scorer = None
        target.unit_type = a.unit_type
        cls._fill_crossover(a, b, target.units, rng)
        return target

    @staticmethod
    def _fill_crossover(a, b, out, rng):
        n = len(a.units)
        if n == 0:
            return
        k = rng.randrange(n)
        crossover = a.unit_type.crossover
        out.extend(crossover(first, second) for first, second in zip(a.units[:k], b.units[:k]))
        out.extend(crossover(second, first) for first, second in zip(a.units[k:], b.units[k:]))

    @classmethod
    def crossover_cut(cls, a, b, rng):
        """Plain one-point crossover, the child is literally `AAABBBBB`."""
        _check_same_length(a, b)
        n = len(a.units)
        if n == 0:
            return cls.with_capacity(a.unit_type)
        k = rng.randrange(n)
        units = [unit.copy() for unit in a.units[:k]]
        units.extend(unit.copy() for unit in b.units[k:])
        return cls(a.unit_type, units)

    @classmethod
    def crossover_4th(cls, a, b):
        """
        Alternating quarters of both parents, the child is `AABBAABB`.
        Loci beyond the last full quarter come from `b`.
        """
        _check_same_length(a, b)
        n = len(a.units)
        q = n // 4
        units = []
        for quarter, parent in enumerate((a, b, a, b)):
            units.extend(unit.copy() for unit in parent.units[quarter * q:(quarter + 1) * q])
        units.extend(unit.copy() for unit in b.units[4 * q:])
        return cls(a.unit_type, units)

    def mutate(self, rng):
        """Mutates one randomly chosen locus in place."""
        if not self.units:
            return
        self.units[rng.randrange(len(self.units))].mutate(rng)

    def cut(self, length):
        """Drops the first `length` units and pads the tail with default units."""
        if length < 0:
            raise ValueError(f"cut length must be non-negative, got {length}")
        length = min(length, len(self.units))
        self.units = self.units[length:] + [self.unit_type.default() for _ in range(length)]

    def shift(self):
        """Rotates the units left by one; the foremost unit moves to the end."""
        if self.units:
            self.units.append(self.units.pop(0))

    # --- misc ---

    def score(self):
        """Failsafe score, 0.0 until a scorer has been attached."""
        if self.scorer is None:
            return 0.0
        return self.scorer.score()

    def __len__(self):
        return len(self.units)

    def __getitem__(self, index):
        return self.units[index]

    def __iter__(self):
        return iter(self.units)

    def __str__(self):
        if len(self.units) > GENOME_DISPLAY_LIMIT:
            head = ", ".join(str(unit) for unit in self.units[:11])
            tail = ", ".join(str(unit) for unit in self.units[-10:])
            return f"[{head} ... {tail}]"
        return "[" + ", ".join(str(unit) for unit in self.units) + "]"

    def __repr__(self):
        return f"Genome({self.unit_type.__name__}, len={len(self.units)}, score={self.score():.3f})"
