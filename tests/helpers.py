import random


class NoRandom:
    """Generator stand-in that fails the test if any random number is drawn."""

    def random(self):
        raise AssertionError("unexpected random draw")

    def uniform(self, a, b):
        raise AssertionError("unexpected random draw")


class ScriptedRandom(random.Random):
    """Returns fixed values for random() and uniform() in the given order."""

    def __init__(self, randoms=(), uniforms=()):
        super().__init__(0)
        self.randoms = list(randoms)
        self.uniforms = list(uniforms)

    def random(self):
        return self.randoms.pop(0)

    def uniform(self, a, b):
        return self.uniforms.pop(0)
