"""Verbatim block tracking."""

from __future__ import annotations

from .models import TOGGLE_STATES, BlockState, LineKind


def advance_block_state(state: BlockState, kind: LineKind) -> tuple[BlockState, bool]:
    """Compute the block state after a line and whether the line is verbatim.

    Blocks never nest. With no block open, a toggle line opens its block.
    With a block open, only a toggle of the same block closes it; every other
    line, including toggles of other blocks, is copied through unchanged.

    Args:
        state: Block state before the line.
        kind: Classification of the line.

    Returns:
        tuple[BlockState, bool]: New block state, and True when the line must
            be emitted verbatim (toggle lines and block content).

    Examples:
        advance_block_state(BlockState.NONE, LineKind.TABLE_FENCE)  # (TABLE, True)
        advance_block_state(BlockState.TABLE, LineKind.GENERIC_FENCE)  # (TABLE, True)
        advance_block_state(BlockState.TABLE, LineKind.TABLE_FENCE)  # (NONE, True)
    """
    target = TOGGLE_STATES.get(kind)

    if state is BlockState.NONE:
        if target is None:
            return state, False
        return target, True

    if target is state:
        return BlockState.NONE, True
    return state, True
