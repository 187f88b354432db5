# wired_creatures_library/nucleotides.py
from enum import IntEnum

WORD_MASK = 0xFFFFFFFF


class Sensor(IntEnum):
    """Input neurons a wiring unit can read from."""
    RIGHT_HALF = 0
    LEFT_HALF = 1
    OSCILLATOR = 2


class Actuator(IntEnum):
    """Output neurons a wiring unit can feed into."""
    MOVE_NORTH = 0
    MOVE_SOUTH = 1
    MOVE_WEST = 2
    MOVE_EAST = 3
    WAIT = 4


class HeritableUnit:
    """
    The capability every heritable unit (nucleotide) must provide so that
    genomes built from it can be crossed over, mutated and randomly created.

    Subclasses implement:
        crossover(a, b) -> unit    (classmethod) child unit sharing values of both parents
        mutate(rng)                change the unit slightly, in place
        random(rng) -> unit        (classmethod) a uniformly random unit
        default() -> unit          (classmethod) the padding value used by Genome.cut
        copy() -> unit             an independent copy
    """

    @classmethod
    def crossover(cls, a, b):
        raise NotImplementedError

    def mutate(self, rng):
        raise NotImplementedError

    @classmethod
    def random(cls, rng):
        raise NotImplementedError

    @classmethod
    def default(cls):
        raise NotImplementedError

    def copy(self):
        raise NotImplementedError


class WiringUnit(HeritableUnit):
    """
    One locus of a creature's wiring, packed into a 32 bit word:

        bits 31..24  sensor selector (modulo the number of sensors)
        bits 23..8   weight numerator (weight = numerator / 65536)
        bits  7..0   actuator selector (modulo the number of actuators)

    Any 32 bit pattern decodes to a valid sensor/actuator pair.
    """
    __slots__ = ("encoded",)

    def __init__(self, encoded=0):
        self.encoded = encoded & WORD_MASK

    @classmethod
    def decode(cls, encoded):
        return cls(encoded)

    @classmethod
    def encode(cls, sensor, weight_numerator, actuator):
        """
        Packs logical fields into a unit.

        Args:
            sensor (int): Sensor selector, 0..255.
            weight_numerator (int): 0..65535, the weight is weight_numerator / 65536.
            actuator (int): Actuator selector, 0..255.
        """
        if not 0 <= int(sensor) <= 0xFF:
            raise ValueError(f"sensor selector out of range: {sensor}")
        if not 0 <= weight_numerator <= 0xFFFF:
            raise ValueError(f"weight numerator out of range: {weight_numerator}")
        if not 0 <= int(actuator) <= 0xFF:
            raise ValueError(f"actuator selector out of range: {actuator}")
        return cls((int(sensor) << 24) | (weight_numerator << 8) | int(actuator))

    def sensor(self):
        return Sensor((self.encoded >> 24) % len(Sensor))

    def weight(self):
        return ((self.encoded >> 8) & 0xFFFF) / 65536.0

    def actuator(self):
        return Actuator((self.encoded & 0xFF) % len(Actuator))

    # --- genetic operators ---

    @classmethod
    def crossover(cls, a, b):
        # Mixing happens at the genome level (cut point), a unit is taken whole.
        return a.copy()

    def mutate(self, rng):
        # Additive, so a carry can spill into the neighbouring field.
        self.encoded = (self.encoded + 2 ** rng.randrange(5)) & WORD_MASK

    @classmethod
    def random(cls, rng):
        return cls(rng.getrandbits(32))

    @classmethod
    def default(cls):
        return cls()

    def copy(self):
        return type(self)(self.encoded)

    def __eq__(self, other):
        if not isinstance(other, WiringUnit):
            return NotImplemented
        return self.encoded == other.encoded

    def __hash__(self):
        return hash(self.encoded)

    def __str__(self):
        return f"{self.sensor().name} {self.weight():.2f} {self.actuator().name}"

    def __repr__(self):
        return f"WiringUnit(0x{self.encoded:08x})"
