"""
Text rendering of alignment grids for debugging.

Nothing in the alignment engine calls this module; pass ``printer()`` as the ``diagnostics`` argument of
``align`` to dump the grid of a single call.
"""
import sys
from typing import Callable, TextIO

from nwalign.core.alphabet import Alphabet
from nwalign.align.grid import AlignmentGrid, Direction


# Constants ------------------------------------------------------------------------------------------------------------
ARROWS = {Direction.NONE: ' ', Direction.DIAG: '⬉', Direction.UP: '⬆', Direction.LEFT: '⬅'}


# Functions ------------------------------------------------------------------------------------------------------------
def draw_grid(grid: AlignmentGrid, alphabet: Alphabet = None) -> str:
    """
    Renders the score table with the traceback direction of every cell.

    Args:
        grid: A filled grid.
        alphabet: Used to label rows and columns with symbols; indices are shown otherwise.

    Returns:
        The table as a multi-line string, reference down the side and query across the top.
    """
    def labels(indices):
        if alphabet is None: return [str(i) for i in indices.tolist()]
        return list(alphabet.decode(indices).decode(Alphabet.ENCODING))

    ref_labels, qry_labels = labels(grid.reference), labels(grid.query)
    rows, cols = grid.shape
    cells = [[f'{ARROWS[grid.pointer(i, j)]} {grid[i, j]}' for j in range(cols)] for i in range(rows)]
    width = max([len(c) for row in cells for c in row] + [len(l) for l in qry_labels] + [4])
    side = max([len(l) for l in ref_labels] + [4])

    lines = [' ' * side + '|' + '|'.join(f'{l:>{width}}' for l in [''] + qry_labels) + '|']
    for i, row in enumerate(cells):
        label = ref_labels[i - 1] if i else ''
        lines.append(f'{label:>{side}}|' + '|'.join(f'{c:>{width}}' for c in row) + '|')
    return '\n'.join(lines)


def printer(alphabet: Alphabet = None, stream: TextIO = None) -> Callable[[AlignmentGrid], None]:
    """Returns a ``diagnostics`` callable that writes ``draw_grid`` output to *stream* (stdout by default)."""
    def _print(grid: AlignmentGrid):
        print(draw_grid(grid, alphabet), file=stream or sys.stdout)
    return _print
