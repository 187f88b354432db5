# wired_creatures_library/config.py

# Board
GRID_WIDTH = 512
GRID_HEIGHT = 512

# Population
DEFAULT_POPULATION_SIZE = 1000
GENOME_LENGTH = 5 # Number of wiring units (loci) per creature
MUTATION_COEFF = 1 # A mutation happens with probability min(1, population / MUTATION_COEFF)
CREATURE_KIND = "wired" # Key into agents.CREATURE_KINDS

# Simulation pacing
STEPS_IN_GENERATION = 300 # Default of a freshly created World
RUNNER_STEPS_IN_GENERATION = 500 # Used by run_simulation.py
NUMBER_OF_GENERATIONS = 200
PREVIEW_EVERY_GENERATIONS = 10 # run_simulation.py prints one genome this often

# Behavior
MOVE_THRESHOLD = 0.5 # Intent (after tanh) needed to queue a move
# The north move has historically been checked against the horizontal intent.
# Set to False to check it against the vertical intent instead.
VERTICAL_CHECK_USES_HORIZONTAL = True

# Reporting
REPORT_SURVIVING_PARENTS = True # Print the parent count at each generation boundary
GENOME_DISPLAY_LIMIT = 30 # Longer genomes are abbreviated when printed

# Plotting output
PLOT_OUTPUT_DIR = "simulation_plots"
