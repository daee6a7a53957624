"""
Proof layout and display.

A proof term is a curried application spine: ((MP bc) ((MP ab) a)).
These utilities unwind the spine into a tree -- head plus arguments --
and walk it to recover the steps from axioms up to the conclusion.
"""

from .terms import LAMBDA, is_application, format_term


def proof_of(item):
    """The proof half of a judgment."""
    return item[1]


def theorem_of(item):
    return item[2]


def spine(proof) -> tuple:
    """
    Unwind a curried application into (head, [args]).

    ((f a) b) -> (f, [a, b]). A non-application is its own head.
    """
    args = []
    while is_application(proof):
        proof, arg = proof
        args.append(arg)
    args.reverse()
    return proof, args


def proof_tree(proof) -> tuple:
    """
    Nested (head, [subtrees]) for a proof term.

    (λ x body) becomes ("λ x", [tree(body)]).
    """
    if isinstance(proof, tuple) and len(proof) == 3 and proof[0] == LAMBDA:
        return (f"{LAMBDA} {format_term(proof[1])}", [proof_tree(proof[2])])
    head, args = spine(proof)
    if isinstance(head, tuple):
        head = format_term(head)
    return (head, [proof_tree(a) for a in args])


def proof_steps(proof) -> list:
    """
    Walk the proof tree. Returns (subproof, depth) pairs, ordered from
    the leaves (axioms) up to the whole proof.
    """
    steps = []

    def walk(p, depth):
        steps.append((p, depth))
        if isinstance(p, tuple) and len(p) == 3 and p[0] == LAMBDA:
            walk(p[2], depth + 1)
            return
        _, args = spine(p)
        for arg in args:
            walk(arg, depth + 1)

    walk(proof, 0)
    steps.reverse()
    return steps


def axioms_used(proof) -> list:
    """Names at the leaves and heads of the proof, first occurrence order."""
    names = []

    def walk(p):
        if isinstance(p, tuple) and len(p) == 3 and p[0] == LAMBDA:
            walk(p[2])
            return
        head, args = spine(p)
        if isinstance(head, str):
            if head not in names:
                names.append(head)
        else:
            walk(head)
        for arg in args:
            walk(arg)

    walk(proof)
    return names


def proof_size(proof) -> int:
    """Number of rule applications in the proof."""
    if isinstance(proof, tuple) and len(proof) == 3 and proof[0] == LAMBDA:
        return 1 + proof_size(proof[2])
    if is_application(proof):
        return 1 + proof_size(proof[0]) + proof_size(proof[1])
    return 0


def format_tree(tree, indent: int = 0) -> list:
    head, children = tree
    lines = ["  " * indent + str(head)]
    for child in children:
        lines.extend(format_tree(child, indent + 1))
    return lines


def print_proof(item):
    """Pretty-print a judgment's proof as a tree."""
    print(f"\n{'='*60}")
    print(f"PROOF of {format_term(theorem_of(item))}")
    print(f"{'='*60}")
    for line in format_tree(proof_tree(proof_of(item))):
        print(f"  {line}")
    print(f"{'='*60}")
    print(f"  {proof_size(proof_of(item))} applications, "
          f"axioms: {', '.join(axioms_used(proof_of(item))) or '(none)'}")
