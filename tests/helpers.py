from antsim import TSPInstance


def ten_node_instance() -> TSPInstance:
    matrix = [[abs(i - j) + 10 * ((i + j) % 3) if i != j else 0 for j in range(10)] for i in range(10)]
    return TSPInstance.from_matrix(matrix, name="ten")


def square_instance() -> TSPInstance:
    """Four corners of a 2 x 2 square: every nearest neighbour tour has length 8."""
    return TSPInstance(coords=[(0.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0)], name="square")


def line_instance(n: int = 5) -> TSPInstance:
    return TSPInstance(coords=[(float(i * i), 0.0) for i in range(n)], name="line")
