"""Short-circuiting absence, simulated with reified just/nothing records."""

from freefx import just, nothing, run_maybe


def halve_even(record):
    if record.x % 2:
        return nothing()
    return just(record.x // 2)


if __name__ == "__main__":
    print(run_maybe(just(12).flat_map(halve_even).flat_map(halve_even)))
    print(run_maybe(just(12).flat_map(halve_even).flat_map(halve_even).flat_map(halve_even)))
