"""Cyclepat: a temporal pattern algebra over cyclic rational time."""

from cyclepat.arc import (
    Arc,
    arc_cycles,
    cycle_pos,
    is_in,
    map_arc,
    mid_point,
    mirror_arc,
    next_sam,
    sam,
    sub_arc,
)
from cyclepat.config import Config, ConfigError, configure_logging, get_config
from cyclepat.ev import Ev
from cyclepat.pattern import (
    Pattern,
    atom,
    bind,
    combine,
    constant,
    continuous_signal,
    density,
    empty,
    every,
    fast,
    filter_offsets,
    fmap,
    if_cycle,
    map_query_arc,
    map_query_time,
    map_result_arc,
    map_result_time,
    overlay,
    pure,
    query,
    rev,
    shift_left,
    shift_right,
    sig,
    silence,
    slow,
    slowcat,
    stack,
    when_cycle,
)
from cyclepat.printer import show
from cyclepat.segment import segment, seq_to_rel_onsets
from cyclepat.sequence import (
    append,
    append_slow,
    cat,
    fastcat,
    list_to_pat,
    maybe_list_to_pat,
    palindrome,
    run,
)
from cyclepat.waveform import (
    configured_rand,
    rand,
    saw,
    saw1,
    sine,
    sine1,
    sine_amp1,
    square,
    square1,
    tri,
    tri1,
)

__all__ = [
    "Arc",
    "Config",
    "ConfigError",
    "Ev",
    "Pattern",
    "append",
    "append_slow",
    "arc_cycles",
    "atom",
    "bind",
    "cat",
    "combine",
    "configure_logging",
    "configured_rand",
    "constant",
    "continuous_signal",
    "cycle_pos",
    "density",
    "empty",
    "every",
    "fast",
    "fastcat",
    "filter_offsets",
    "fmap",
    "get_config",
    "if_cycle",
    "is_in",
    "list_to_pat",
    "map_arc",
    "map_query_arc",
    "map_query_time",
    "map_result_arc",
    "map_result_time",
    "maybe_list_to_pat",
    "mid_point",
    "mirror_arc",
    "next_sam",
    "overlay",
    "palindrome",
    "pure",
    "query",
    "rand",
    "rev",
    "run",
    "sam",
    "saw",
    "saw1",
    "segment",
    "seq_to_rel_onsets",
    "shift_left",
    "shift_right",
    "show",
    "sig",
    "silence",
    "sine",
    "sine1",
    "sine_amp1",
    "slow",
    "slowcat",
    "square",
    "square1",
    "stack",
    "sub_arc",
    "tri",
    "tri1",
    "when_cycle",
]
