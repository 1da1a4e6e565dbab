"""Shared hierarchy fixtures."""

import pytest

from mrosniff.providers import DeclarativeProvider

# Abstract{new,foo,bar,baz}; Child1(Abstract){foo}; Child2(Abstract){foo,bar};
# Grandchild(Child1, Child2){foo,bar,quux}
DIAMOND = {
    "Abstract": ([], ["new", "foo", "bar", "baz"]),
    "Child1": (["Abstract"], ["foo"]),
    "Child2": (["Abstract"], ["foo", "bar"]),
    "Grandchild": (["Child1", "Child2"], ["foo", "bar", "quux"]),
}

# One(Two, Three); Three(Four, Six); Four(Five)
CONVOLUTED = {
    "One": (["Two", "Three"], []),
    "Two": ([], []),
    "Three": (["Four", "Six"], []),
    "Four": (["Five"], []),
    "Five": ([], []),
    "Six": ([], []),
}


@pytest.fixture()
def diamond():
    return DeclarativeProvider(DIAMOND)


@pytest.fixture()
def convoluted():
    return DeclarativeProvider(CONVOLUTED)
