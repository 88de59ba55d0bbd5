from retris.tetromino import (
    BOX_SIZE,
    PIECE_VALUES,
    Tetromino,
    TetrominoType,
    rotation_count,
    shape_blocks,
)


def test_every_orientation_has_four_cells_inside_the_box():
    for shape in TetrominoType:
        for rotation in range(rotation_count(shape)):
            cells = shape_blocks(shape, rotation)
            assert len(set(cells)) == 4
            assert all(0 <= r < BOX_SIZE and 0 <= c < BOX_SIZE for r, c in cells)


def test_square_has_one_orientation_and_others_four():
    assert rotation_count(TetrominoType.O) == 1
    for shape in TetrominoType:
        if shape is not TetrominoType.O:
            assert rotation_count(shape) == 4, shape


def test_rotation_index_wraps():
    assert shape_blocks(TetrominoType.T, 5) == shape_blocks(TetrominoType.T, 1)
    assert shape_blocks(TetrominoType.L, -1) == shape_blocks(TetrominoType.L, 3)


def test_rotating_full_cycle_returns_starting_cells():
    for shape in TetrominoType:
        start = Tetromino(shape, position=(3, 4))
        piece = start
        for _ in range(rotation_count(shape)):
            piece = piece.rotated(1)
        assert sorted(piece.blocks()) == sorted(start.blocks())

        piece = start
        for _ in range(rotation_count(shape)):
            piece = piece.rotated(-1)
        assert sorted(piece.blocks()) == sorted(start.blocks())


def test_clockwise_then_counter_clockwise_is_identity():
    piece = Tetromino(TetrominoType.J, position=(2, 2))
    assert piece.rotated(1).rotated(-1) == piece


def test_moved_returns_shifted_copy():
    piece = Tetromino(TetrominoType.I, position=(0, 3))
    moved = piece.moved(2, -1)
    assert moved.position == (2, 2)
    assert piece.position == (0, 3)
    assert moved.blocks() == [(r + 2, c - 1) for r, c in piece.blocks()]


def test_piece_values_are_distinct_and_non_zero():
    values = list(PIECE_VALUES.values())
    assert sorted(values) == list(range(1, 8))
    assert TetrominoType.I.value_id == PIECE_VALUES[TetrominoType.I]
