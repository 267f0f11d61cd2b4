#!/usr/bin/env python3
"""
Demo script showing GraphML export of a transaction DAG.

This script builds a graph from scripts/sample_dag.yaml and exports it to
GraphML, which can be imported into graph analysis tools like Gephi, yEd, or
other NetworkX-compatible software.
"""

import sys
import os
# Add parent directory to path so we can import txdag_core
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from txdag_core.compiler import compile_from_file
from txdag_core.render import format_graph

def main():
    """Demo GraphML export functionality."""

    print("Building transaction DAG from scripts/sample_dag.yaml...")
    graph = compile_from_file('scripts/sample_dag.yaml')

    print(f"Graph contains {graph.size()} transactions")
    print(format_graph(graph))

    output_file = 'sample_dag.graphml'
    print(f"Exporting to {output_file}...")
    graph.export_graphml(output_file)

    print("✓ GraphML export completed successfully!")
    print(f"✓ File saved as: {output_file}")
    print()
    print("The GraphML file contains:")
    print("- Node attributes: timestamp, depth, in_reference")
    print("- Edge attributes: multiplicity (2 when both parents are the same transaction)")
    print("- Edges point from child to parent")

if __name__ == '__main__':
    main()
