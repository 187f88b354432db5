# run_simulation.py
import os
import random
import sys

import numpy as np

# Import from the local library package
from wired_creatures_library import create_world, config as sim_config

# Matplotlib for plotting - optional, attempt import
try:
    import matplotlib.pyplot as plt
    plt.switch_backend('Agg')
except ImportError:
    plt = None
    print("Matplotlib not found. End-of-run plotting will be disabled.")


def generate_and_save_plots(model_vars, output_dir):
    if not plt:
        print("Matplotlib not available. Skipping plot generation.")
        return
    if not os.path.exists(output_dir):
        try:
            os.makedirs(output_dir)
        except OSError as e:
            print(f"Error creating plot directory {output_dir}: {e}. Plots will not be saved.")
            return

    generations = model_vars["Generation"]
    parents = model_vars["Surviving parents"]
    population = np.asarray(model_vars["Population"], dtype=float)
    share = np.divide(parents, population, out=np.zeros_like(population), where=population > 0)

    plt.figure(figsize=(12, 7))
    plt.plot(generations, parents, label="Surviving parents", marker='o', linestyle='-')
    plt.title("Surviving parents over Generations", fontsize=16)
    plt.xlabel("Generation", fontsize=14)
    plt.ylabel("Parents", fontsize=14)
    plt.legend(fontsize=12)
    plt.grid(True, linestyle=':', alpha=0.7)
    plt.tight_layout()
    plot_path = os.path.join(output_dir, "surviving_parents_over_generations.png")
    try:
        plt.savefig(plot_path)
        print(f"Saved surviving parents plot to {plot_path}")
    except OSError as e:
        print(f"Error saving surviving parents plot: {e}")
    plt.close()

    plt.figure(figsize=(12, 7))
    plt.plot(generations, share, label="Parent share", marker='.', color='green')
    plt.title("Share of the population selected as parents", fontsize=16)
    plt.xlabel("Generation", fontsize=14)
    plt.ylabel("Share", fontsize=14)
    plt.ylim(0.0, 1.0)
    plt.legend(fontsize=12)
    plt.grid(True, linestyle=':', alpha=0.7)
    plt.tight_layout()
    plot_path = os.path.join(output_dir, "parent_share_over_generations.png")
    try:
        plt.savefig(plot_path)
        print(f"Saved parent share plot to {plot_path}")
    except OSError as e:
        print(f"Error saving parent share plot: {e}")
    plt.close()


def run_simulation(seed=None, generations=sim_config.NUMBER_OF_GENERATIONS):
    world = create_world(
        sim_config.DEFAULT_POPULATION_SIZE,
        sim_config.MUTATION_COEFF,
        sim_config.GRID_WIDTH,
        sim_config.GRID_HEIGHT,
        random.Random(seed),
        genome_length=sim_config.GENOME_LENGTH,
    )
    world.set_steps_in_generation(sim_config.RUNNER_STEPS_IN_GENERATION)
    print(f"Population size: {len(world.creatures)}, board: {world.width}x{world.height}")

    next_preview = 0
    while world.generation() < generations:
        if world.generation() >= next_preview:
            next_preview += sim_config.PREVIEW_EVERY_GENERATIONS
            if world.creatures.genomes:
                print(f"\n--- Generation {world.generation()}. One random brain: ---")
                print(world.creatures.genomes[0])
        world.advance_to_generation_end()

    print("Simulation finished.")
    print(world.details())

    if plt and world.datacollector.model_vars["Generation"]:
        generate_and_save_plots(world.datacollector.model_vars, sim_config.PLOT_OUTPUT_DIR)
    return world


if __name__ == '__main__':
    # Optional seed as first argument for a reproducible run
    run_seed = int(sys.argv[1]) if len(sys.argv) > 1 else None
    run_simulation(seed=run_seed)
