"""sass-dep: dependency graph analysis for Sass / SCSS projects."""

__version__ = "0.1.0"
