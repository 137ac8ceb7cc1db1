"""Graph Studio plugin manifest."""

manifest = {
    "title": "Graph Studio",
    "summary": "Plot functions, parametric and polar curves, wireframe surfaces and the Riemann zeta function from typed formulas.",
    "category": "General Utilities",
    "blueprint": "graph_studio",
    "icon": "img/GraphStudio_icon.png",
}

__all__ = ["manifest"]
