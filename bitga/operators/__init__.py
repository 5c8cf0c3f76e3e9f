"""
bitga.operators

Genetic operators for fixed-length bit genomes.

Submodules
----------
base        CROSSOVER strategy names, CrossoverOperator base class, registry
crossover   One-point, two-point, uniform and masked-uniform crossover
mutation    Independent per-bit flip mutation

All crossover operators are registered in CROSSOVER_REGISTRY on import:

    from bitga.operators.base import CROSSOVER_REGISTRY
    import bitga.operators.crossover  # triggers registration
"""
