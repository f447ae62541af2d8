"""Max-flow, min-cost-flow, min-cut and flow validation algorithms.

Each max-flow algorithm is a plain function taking a `FlowNetwork` and
returning a `MaxFlowResult` tagged with the algorithm that produced it.
"""
