"""Shared helpers: settings merging, seed hashing, local entropy, statistics."""
from bufrng.common.deep_merge import deep_merge_json, load_json_optional
from bufrng.common.seed_hash import seed_to_words
from bufrng.common.entropy import gather_local_entropy

__all__ = ["deep_merge_json", "load_json_optional", "seed_to_words", "gather_local_entropy"]
