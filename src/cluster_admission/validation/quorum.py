"""Master quorum calculation."""


def calculate_quorum(num_masters: int) -> int:
    """Minimum number of masters that must agree to avoid a split brain.

    This is a strict majority: the smallest integer greater than half of
    ``num_masters``. A cluster with no masters has no quorum, so 0 (or a
    negative count, which only arises from already-invalid replica
    counts) yields 0.
    """
    if num_masters <= 0:
        return 0
    return num_masters // 2 + 1
