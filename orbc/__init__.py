"""Front-end building blocks of the Orb language compiler: types, symbols, names, literals and options."""

__version__ = "0.1.0"