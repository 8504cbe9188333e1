from .normalize import Normalizer, is_blacklisted
from .chain import MarkovChain, tokenize, train_chains
from .pipe import Pipe

try:
    from .temporal import smooth, build_profiles
    from .scorer import Scorer, evaluate
except ImportError:
    pass  # torch not installed, chains and normalization only
