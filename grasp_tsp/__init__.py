from .config import GRASPConfig
from .construction import construct_randomized_greedy
from .geometry import distance_matrix, euc_2d
from .instance import ProblemInstance, as_instance, tour_length
from .two_opt import local_search, stochastic_two_opt
from .search import GRASP, grasp_search
from .solver import TSPSolver
from .tour import SearchResult, Tour, check_feasibility

__version__ = '0.1.0'

__all__ = [
    'GRASP',
    'GRASPConfig',
    'ProblemInstance',
    'SearchResult',
    'TSPSolver',
    'Tour',
    'as_instance',
    'check_feasibility',
    'construct_randomized_greedy',
    'distance_matrix',
    'euc_2d',
    'grasp_search',
    'local_search',
    'stochastic_two_opt',
    'tour_length',
]
