def compute_accuracy(correct: int, attempts: int) -> int:
    """Whole-number percentage of ``correct`` over ``attempts``, half rounded up; 0 with no attempts."""
    if attempts <= 0:
        return 0
    # integer form of floor(100 * correct / attempts + 1/2)
    return (200 * correct + attempts) // (2 * attempts)
