# wired_creatures_library/evolution.py
from .genome import Genome


def select_parents(genomes, positions, width):
    """
    Selection rule: a genome becomes a parent if its creature ended the
    generation in the right half of the board (x > width // 2).

    Args:
        genomes (list): Genomes of the finished generation.
        positions (numpy.ndarray): (n, 2) positions aligned with `genomes`.
        width (int): Board width.

    Returns:
        list: The parent genomes, in population order.
    """
    half = width // 2
    return [genome for genome, x in zip(genomes, positions[:, 0].tolist()) if x > half]


def shuffle_partners(parents, rng):
    """
    Gives every parent a fresh random key and returns the parents sorted by key.
    The `parents` list itself keeps its order, only the pairing is randomised.
    """
    keyed = [(rng.getrandbits(32), parent) for parent in parents]
    keyed.sort(key=lambda pair: pair[0])
    return [parent for _, parent in keyed]


def breed_offspring(parents, n, rng, crossover=Genome.crossover):
    """
    Produces exactly `n` offspring from `parents`.

    Every parent is crossed with a randomly assigned partner. If that gives
    fewer than `n` children, partners are reshuffled and another batch is bred,
    swapping which genome goes first on every refill pass, until there are
    enough. Surplus children are dropped.

    Args:
        parents (list): Non-empty list of parent genomes.
        n (int): Size of the next generation.
        rng (random.Random): The simulation's random stream.
        crossover (callable): Genome level crossover `(a, b, rng) -> Genome`.

    Returns:
        list: `n` new, unscored genomes.
    """
    if not parents:
        raise ValueError("breed_offspring needs at least one parent")

    partners = shuffle_partners(parents, rng)
    offspring = [crossover(parent, partner, rng) for parent, partner in zip(parents, partners)]

    refill_pass = 0
    while len(offspring) < n:
        refill_pass += 1
        partners = shuffle_partners(parents, rng)
        if refill_pass % 2:
            offspring.extend(crossover(partner, parent, rng) for parent, partner in zip(parents, partners))
        else:
            offspring.extend(crossover(parent, partner, rng) for parent, partner in zip(parents, partners))
    return offspring[:n]


def repopulate_randomly(unit_type, n, genome_length, rng):
    """Fallback for a generation without parents: `n` fresh random genomes."""
    return [Genome.random(unit_type, genome_length, rng) for _ in range(n)]
