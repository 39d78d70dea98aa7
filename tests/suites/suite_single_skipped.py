from suitelist.bdd import it


@it.skip("should be skipped")
def _():
    pass
