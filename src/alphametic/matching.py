import logging

import networkx as nx


__all__ = [
    'value_graph',
    'filter_all_different',
]


LOG = logging.getLogger(__name__)


def _var_node(var_name):
    return ('var', var_name)


def _value_node(value):
    return ('value', value)


def value_graph(var_names, store):
    """Bipartite variable/value graph of the current domains."""
    graph = nx.Graph()
    for var_name in var_names:
        graph.add_node(_var_node(var_name), bipartite=0)
        for value in store[var_name]:
            graph.add_node(_value_node(value), bipartite=1)
            graph.add_edge(_var_node(var_name), _value_node(value))
    return graph


def filter_all_different(var_names, store):
    """All-different filtering based on maximum matchings (Regin).

       A value is removed from a domain when the corresponding edge does not
       belong to any maximum matching of the variable/value graph. Returns
       False if no matching covers all the variables.
    """
    var_nodes = [_var_node(var_name) for var_name in var_names]
    graph = value_graph(var_names, store)
    matching = nx.bipartite.hopcroft_karp_matching(graph, top_nodes=var_nodes)
    if any(var_node not in matching for var_node in var_nodes):
        return False

    # matched edges go var -> value, the other edges value -> var
    oriented = nx.DiGraph()
    oriented.add_nodes_from(graph.nodes)
    for var_node in var_nodes:
        for value_node in graph.neighbors(var_node):
            if matching[var_node] == value_node:
                oriented.add_edge(var_node, value_node)
            else:
                oriented.add_edge(value_node, var_node)

    component = {}
    for index, nodes in enumerate(nx.strongly_connected_components(oriented)):
        for node in nodes:
            component[node] = index

    # edges on an alternating path starting from a free value
    free_reachable = set()
    for node in oriented.nodes:
        if node[0] == 'value' and node not in matching:
            free_reachable.add(node)
            free_reachable.update(nx.descendants(oriented, node))

    for var_name, var_node in zip(var_names, var_nodes):
        removed = set()
        for value_node in graph.neighbors(var_node):
            if matching[var_node] == value_node:
                continue
            if component[value_node] == component[var_node]:
                continue
            if value_node in free_reachable:
                continue
            removed.add(value_node[1])
        if removed:
            LOG.debug("all_different matching: %s: removing %s", var_name, sorted(removed))
            if store.narrow(var_name, store[var_name].difference(removed)).empty:
                return False
    return True
