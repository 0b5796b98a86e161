"""
Example 01: Classes, Links and the Hasse Diagram

Loads a small chain with a transient state feeding two closed classes and
walks through the decomposition step by step.
"""

import pandas as pd
from hassechain import HasseChain, format_report

def main():
    # 1. Create Data: one row per transition
    print("Building chain...")
    edges = pd.DataFrame([
        (1, 2, 0.5), (1, 4, 0.5),   # transient start, splits two ways
        (2, 3, 1.0), (3, 2, 1.0),   # periodic pair
        (4, 4, 1.0),                # absorbing state
    ], columns=["source", "target", "probability"])

    print(edges)

    with HasseChain() as chain:
        chain.load_edges(edges)
        print(f"\nMarkov graph: {chain.is_markov()}")

        # 2. Classes and the links between them
        # -------------------------------------
        print("\n--- Classes ---")
        print(chain.classes().to_pandas())

        print("\n--- Hasse diagram ---")
        print(chain.hasse_mermaid())

        # 3. Long-run behaviour of each closed class
        # ------------------------------------------
        print("--- Stationary distributions ---")
        print(chain.stationary_table().to_pandas())

        # The pair {2,3} has period 2 and never settles
        print(f"\nPeriods: {chain.periods()}")

        # 4. Full report
        print("\n" + format_report(chain.analyze()))

if __name__ == "__main__":
    main()
