from suitelist.bdd import describe, it

with describe("A suite") as suite:
    suite.timeout(1234)

    @it("should print its timeout")
    def _():
        pass
