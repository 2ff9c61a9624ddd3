"""Sample puzzle with ten varied categories, ordered by difficulty."""

from __future__ import annotations

from typing import List, Optional

from clusters_puzzle.game.models import Category, Puzzle


FRUITS = Category(
    id="cat-fruits",
    name="Fruits",
    difficulty=1,
    items=(
        "Apple", "Banana", "Orange", "Grape", "Mango",
        "Pineapple", "Strawberry", "Watermelon", "Peach", "Cherry",
    ),
)

COUNTRIES = Category(
    id="cat-countries",
    name="Countries",
    difficulty=2,
    items=(
        "France", "Japan", "Brazil", "Egypt", "Canada",
        "Australia", "Mexico", "India", "Spain", "Italy",
    ),
)

DOG_BREEDS = Category(
    id="cat-dogs",
    name="Dog Breeds",
    difficulty=3,
    items=(
        "Labrador", "Poodle", "Bulldog", "Beagle", "Husky",
        "Boxer", "Dalmatian", "Chihuahua", "Rottweiler", "Collie",
    ),
)

ELEMENTS = Category(
    id="cat-elements",
    name="Chemical Elements",
    difficulty=4,
    items=(
        "Oxygen", "Hydrogen", "Carbon", "Gold", "Silver",
        "Iron", "Copper", "Helium", "Neon", "Zinc",
    ),
)

GREEK_GODS = Category(
    id="cat-greek-gods",
    name="Greek Gods",
    difficulty=5,
    items=(
        "Zeus", "Hera", "Poseidon", "Athena", "Apollo",
        "Artemis", "Hermes", "Hades", "Ares", "Aphrodite",
    ),
)

PASTA = Category(
    id="cat-pasta",
    name="Pasta Shapes",
    difficulty=6,
    items=(
        "Spaghetti", "Penne", "Rigatoni", "Fusilli", "Linguine",
        "Fettuccine", "Ravioli", "Lasagna", "Orzo", "Farfalle",
    ),
)

INSTRUMENTS = Category(
    id="cat-instruments",
    name="Musical Instruments",
    difficulty=7,
    items=(
        "Piano", "Guitar", "Violin", "Drums", "Flute",
        "Trumpet", "Saxophone", "Cello", "Harp", "Clarinet",
    ),
)

GEMSTONES = Category(
    id="cat-gemstones",
    name="Gemstones",
    difficulty=8,
    items=(
        "Diamond", "Ruby", "Emerald", "Sapphire", "Amethyst",
        "Topaz", "Opal", "Pearl", "Jade", "Garnet",
    ),
)

CURRENCIES = Category(
    id="cat-currencies",
    name="World Currencies",
    difficulty=9,
    items=(
        "Dollar", "Euro", "Pound", "Yen", "Peso",
        "Franc", "Rupee", "Won", "Krona", "Baht",
    ),
)

DANCES = Category(
    id="cat-dances",
    name="Types of Dance",
    difficulty=10,
    items=(
        "Waltz", "Tango", "Salsa", "Ballet", "Foxtrot",
        "Rumba", "Swing", "Polka", "Mambo", "Samba",
    ),
)


SAMPLE_PUZZLE = Puzzle(
    id="puzzle-sample-001",
    month="2026-01",
    categories=(
        FRUITS,
        COUNTRIES,
        DOG_BREEDS,
        ELEMENTS,
        GREEK_GODS,
        PASTA,
        INSTRUMENTS,
        GEMSTONES,
        CURRENCIES,
        DANCES,
    ),
)


def find_category_for_item(puzzle: Puzzle, item: str) -> Optional[Category]:
    for category in puzzle.categories:
        if item in category.items:
            return category
    return None


def get_all_items(puzzle: Puzzle) -> List[str]:
    return [item for category in puzzle.categories for item in category.items]
