import sys

from suitelist.bdd import it

print("loading noisy suite")
print("noisy suite warning", file=sys.stderr)


@it("should still be listed")
def _():
    pass
