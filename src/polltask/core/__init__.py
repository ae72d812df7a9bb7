"""Task contract, poll outcomes, results, errors and the clock port."""
