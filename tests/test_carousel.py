"""Tests for carousel index arithmetic."""

from __future__ import annotations

import random

import pytest

from quotadash.carousel import CarouselController


class _Sized:
    def __init__(self, count: int) -> None:
        self.count = count

    def __call__(self) -> int:
        return self.count


def test_next_wraps_around() -> None:
    carousel = CarouselController(_Sized(3))
    assert [carousel.next() for _ in range(4)] == [1, 2, 0, 1]


def test_previous_wraps_around() -> None:
    carousel = CarouselController(_Sized(3))
    assert [carousel.previous() for _ in range(4)] == [2, 1, 0, 2]


@pytest.mark.parametrize("count", [1, 2, 5])
def test_next_and_previous_are_inverse(count: int) -> None:
    carousel = CarouselController(_Sized(count))
    for start in range(count):
        carousel.index = start
        carousel.next()
        carousel.previous()
        assert carousel.index == start
        carousel.previous()
        carousel.next()
        assert carousel.index == start


def test_single_account_navigation_is_identity() -> None:
    carousel = CarouselController(_Sized(1))
    assert carousel.next() == 0
    assert carousel.previous() == 0


def test_empty_list_does_not_raise() -> None:
    carousel = CarouselController(_Sized(0))
    assert carousel.next() == 0
    assert carousel.previous() == 0
    assert carousel.repair() == 0


def test_repair_resets_out_of_bounds_index() -> None:
    size = _Sized(3)
    carousel = CarouselController(size)
    carousel.index = 2
    size.count = 2
    assert carousel.repair() == 0


def test_repair_keeps_valid_index() -> None:
    size = _Sized(3)
    carousel = CarouselController(size)
    carousel.index = 1
    size.count = 2
    assert carousel.repair() == 1


def test_index_stays_in_bounds_under_random_operations() -> None:
    rng = random.Random(1234)
    size = _Sized(1)
    carousel = CarouselController(size)
    for _ in range(500):
        action = rng.choice(["add", "remove", "next", "previous"])
        if action == "add":
            size.count += 1
        elif action == "remove" and size.count > 1:
            size.count -= 1
        elif action == "next":
            carousel.next()
        elif action == "previous":
            carousel.previous()
        carousel.repair()
        assert 0 <= carousel.index < size.count
