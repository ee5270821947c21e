"""
ResourceTiming compression core.

Usage:
    from resourcetiming_compression.compression import compress, decompress

    payload = compress(records)      # root Branch, or [] for nothing
    records = decompress(payload)
"""

from .compressor import (
    CompressionResult,
    ResourceTimingCompressor,
    ResultsAccumulator,
    accumulate_results,
    build_payload,
    compress,
    get_resource_timing,
    is_pseudo_resource,
)
from .decompressor import (
    decode_entry,
    decode_record,
    decompress,
    flatten_trie,
    from_base36,
    records_to_dataframe,
)
from .exceptions import CompressionError, DecodeError, ReservedCharacterError
from .payload import (
    Payload,
    dumps_payload,
    loads_payload,
    trie_from_dict,
    trie_to_dict,
)
from .timing import encode_entry, initiator_code, timing_deltas, to_base36, trim_timing
from .trie import (
    Branch,
    Leaf,
    MergeUp,
    NoChange,
    OptimizeResult,
    ReplaceWithNode,
    TrieNode,
    convert_to_trie,
    count_nodes,
    iter_trie,
    optimize_branch,
    optimize_trie,
)

__all__ = [
    # Orchestration
    "compress",
    "get_resource_timing",
    "build_payload",
    "accumulate_results",
    "is_pseudo_resource",
    "ResultsAccumulator",
    "ResourceTimingCompressor",
    "CompressionResult",
    # Timing encoder
    "trim_timing",
    "to_base36",
    "initiator_code",
    "timing_deltas",
    "encode_entry",
    # Trie
    "Leaf",
    "Branch",
    "TrieNode",
    "NoChange",
    "ReplaceWithNode",
    "MergeUp",
    "OptimizeResult",
    "convert_to_trie",
    "optimize_branch",
    "optimize_trie",
    "iter_trie",
    "count_nodes",
    # Wire form
    "Payload",
    "trie_to_dict",
    "trie_from_dict",
    "dumps_payload",
    "loads_payload",
    # Decompression
    "from_base36",
    "decode_record",
    "decode_entry",
    "flatten_trie",
    "decompress",
    "records_to_dataframe",
    # Exceptions
    "CompressionError",
    "ReservedCharacterError",
    "DecodeError",
]
