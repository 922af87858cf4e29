"""Version information for linkprune."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to registry text or rewrite output
# MINOR: New features, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.2.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.2.0 - Tree-sitter based extraction
#         - Route annotations and registration sites read from syntax trees
#         - Byte-exact splicing of the forRoot registry argument
#         - Provider pass for on-demand overlay controllers
# 0.1.0 - Initial release
#         - Regex based deep link scraping (removed in 0.2.0)
#         - Manual tree shaking of the framework barrel
