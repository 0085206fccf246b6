from asciiflow.core.particles import ParticleSet


class SequenceRng:
    """Random source that replays fixed integer samples; random() returns a constant."""

    def __init__(self, integers, value=0.0):
        self._integers = list(integers)
        self.value = value

    def integers(self, low, high=None):
        return self._integers.pop(0)

    def random(self):
        return self.value


def make_particles(chars, positions, velocities=None):
    if velocities is None:
        velocities = [[0.0, 0.0] for _ in chars]
    return ParticleSet(list(chars), positions, velocities)
