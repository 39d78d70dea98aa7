from suitelist.bdd import describe, it

with describe("A suite") as suite:
    suite.slow(1234)

    @it("should print its slowness threshold")
    def _():
        pass
