"""Unit tests for ObligationResolver.

Tests cover:
- Abstract methods from interfaces and the class chain become obligations
- Deduplication by (name, parameter types, return type)
- Final declarations anywhere in the chain suppress obligations
- Package-private and protected abstract methods are found
- Deterministic ordering
- Reconciliation of differing throws lists, concrete overrides included
"""

from implgen.core.generator.resolver import ObligationResolver
from implgen.core.generator.signature import MethodSignature
from implgen.core.introspection.descriptors import (
    DeclaredMembers,
    MethodDescriptor,
    Parameter,
    TypeDescriptor,
)


def _signatures(obligations):
    return [str(o.signature) for o in obligations]


def _method(name, declaring, modifiers=("public", "abstract"), params=(), ret="void", exceptions=()):
    return MethodDescriptor(
        name=name,
        parameters=tuple(Parameter(t, f"p{i}") for i, t in enumerate(params)),
        return_type=ret,
        exceptions=tuple(exceptions),
        modifiers=frozenset(modifiers),
        declaring_type=declaring,
    )


# ── Source-backed scenarios ───────────────────────────────────────────────


DIAMOND = {
    "d/Left.java": '''
        package d;

        public interface Left {
            int value();

            void reset();
        }
    ''',
    "d/Right.java": '''
        package d;

        public interface Right {
            int value();

            long value(long seed);
        }
    ''',
    "d/Both.java": '''
        package d;

        public interface Both extends Left, Right {
        }
    ''',
}

SEALED_CHAIN = {
    "f/Root.java": '''
        package f;

        public abstract class Root {
            public abstract String id();

            protected abstract void start();

            abstract int size();

            public abstract boolean open();
        }
    ''',
    "f/Middle.java": '''
        package f;

        public abstract class Middle extends Root {
            public final String id() {
                return "middle";
            }

            public boolean open() {
                return true;
            }
        }
    ''',
    "f/Leaf.java": '''
        package f;

        public abstract class Leaf extends Middle implements Sized {
            protected final void start() {
            }
        }
    ''',
    "f/Sized.java": '''
        package f;

        public interface Sized {
            int size();

            String id();
        }
    ''',
}


class TestObligationsFromSource:
    def test_interface_method_becomes_obligation(self, make_index):
        index = make_index({
            "a/Counter.java": '''
                package a;

                public interface Counter {
                    int getValue();
                }
            ''',
        })
        obligations = ObligationResolver().resolve(index.describe("a.Counter"))
        assert _signatures(obligations) == ["int getValue()"]

    def test_overlapping_interfaces_deduplicated(self, make_index):
        obligations = ObligationResolver().resolve(make_index(DIAMOND).describe("d.Both"))
        assert _signatures(obligations) == ["void reset()", "int value()", "long value(long)"]

    def test_no_duplicate_signatures(self, make_index):
        obligations = ObligationResolver().resolve(make_index(DIAMOND).describe("d.Both"))
        keys = [o.signature for o in obligations]
        assert len(keys) == len(set(keys))

    def test_final_override_suppresses(self, make_index):
        obligations = ObligationResolver().resolve(make_index(SEALED_CHAIN).describe("f.Leaf"))
        names = [o.signature.name for o in obligations]
        # id() is final in Middle even though Sized re-declares it; start() is final in Leaf
        assert "id" not in names
        assert "start" not in names

    def test_package_private_abstract_found(self, make_index):
        obligations = ObligationResolver().resolve(make_index(SEALED_CHAIN).describe("f.Leaf"))
        assert "int size()" in _signatures(obligations)

    def test_abstract_ancestor_method_overridden_concretely(self, make_index):
        # Root.open is still declared abstract on a chain member, so it is stubbed
        obligations = ObligationResolver().resolve(make_index(SEALED_CHAIN).describe("f.Leaf"))
        assert "boolean open()" in _signatures(obligations)

    def test_no_obligations(self, make_index):
        index = make_index({
            "a/Done.java": '''
                package a;

                public abstract class Done {
                    public void run() {
                    }
                }
            ''',
        })
        assert ObligationResolver().resolve(index.describe("a.Done")) == []

    def test_jdk_contract(self, make_index):
        index = make_index({
            "a/Task.java": '''
                package a;

                import java.util.concurrent.Callable;

                public interface Task extends Runnable, Callable<String> {
                }
            ''',
        })
        obligations = ObligationResolver().resolve(index.describe("a.Task"))
        assert _signatures(obligations) == ["java.lang.Object call()", "void run()"]
        assert obligations[0].exceptions == ("java.lang.Exception",)

    def test_concrete_override_narrows_exceptions(self, make_index):
        index = make_index({
            "q/Root.java": '''
                package q;

                public abstract class Root {
                    protected abstract void go() throws java.io.IOException;
                }
            ''',
            "q/Mid.java": '''
                package q;

                public abstract class Mid extends Root {
                    public void go() {
                    }
                }
            ''',
        })
        [obligation] = ObligationResolver().resolve(index.describe("q.Mid"))
        assert str(obligation.signature) == "void go()"
        assert obligation.exceptions == ()
        assert obligation.exception_conflicts == ("q.Root",)
        # the stub may not weaken the public override's visibility
        assert obligation.representative.declaring_type == "q.Mid"
        assert obligation.representative.is_public

    def test_deterministic(self, make_index):
        index = make_index(SEALED_CHAIN)
        subject = index.describe("f.Leaf")
        first = ObligationResolver().resolve(subject)
        second = ObligationResolver().resolve(subject)
        assert first == second


# ── Descriptor-level set algebra ──────────────────────────────────────────


class TestSetAlgebra:
    def _subject(self, chain, visible=()):
        return TypeDescriptor(
            qualified_name=chain[0].type_name,
            simple_name=chain[0].type_name.rsplit(".", 1)[-1],
            package_name="x",
            kind="class",
            modifiers=frozenset({"public", "abstract"}),
            ancestor_chain=tuple(chain) + (DeclaredMembers("java.lang.Object"),),
            implemented_interfaces=(),
            externally_visible_methods=tuple(visible),
        )

    def test_signature_ignores_modifiers_and_exceptions(self):
        a = _method("go", "x.A", params=("int",), exceptions=("java.io.IOException",))
        b = _method("go", "x.B", modifiers=("protected", "abstract"), params=("int",))
        assert MethodSignature.of(a) == MethodSignature.of(b)
        assert hash(MethodSignature.of(a)) == hash(MethodSignature.of(b))

    def test_return_type_is_part_of_signature(self):
        a = _method("go", "x.A", ret="int")
        b = _method("go", "x.A", ret="long")
        assert MethodSignature.of(a) != MethodSignature.of(b)

    def test_final_on_other_branch_suppresses(self):
        abstract_go = _method("go", "x.I")
        final_go = _method("go", "x.Base", modifiers=("public", "final"))
        subject = self._subject(
            [DeclaredMembers("x.Sub"), DeclaredMembers("x.Base", methods=(final_go,))],
            visible=[abstract_go],
        )
        assert ObligationResolver().resolve(subject) == []

    def test_sorted_by_name_then_parameters(self):
        methods = (
            _method("b", "x.A"),
            _method("a", "x.A", params=("long",)),
            _method("a", "x.A", params=("int",)),
        )
        subject = self._subject([DeclaredMembers("x.A", methods=methods)])
        assert _signatures(ObligationResolver().resolve(subject)) == [
            "void a(int)", "void a(long)", "void b()",
        ]

    def test_representative_is_first_occurrence(self):
        visible = _method("go", "x.I", modifiers=("public", "abstract"))
        declared = _method("go", "x.A", modifiers=("protected", "abstract"))
        subject = self._subject([DeclaredMembers("x.A", methods=(declared,))], visible=[visible])
        [obligation] = ObligationResolver().resolve(subject)
        assert obligation.representative.declaring_type == "x.I"

    def test_conflicting_exceptions_keep_common_ones(self):
        first = _method("go", "x.I", exceptions=("java.io.IOException", "x.AppException"))
        second = _method("go", "x.A", exceptions=("x.AppException",))
        subject = self._subject([DeclaredMembers("x.A", methods=(second,))], visible=[first])
        [obligation] = ObligationResolver().resolve(subject)
        assert obligation.exceptions == ("x.AppException",)
        assert obligation.exception_conflicts == ("x.A",)

    def test_matching_exceptions_are_not_conflicts(self):
        first = _method("go", "x.I", exceptions=("java.io.IOException",))
        second = _method("go", "x.A", exceptions=("java.io.IOException",))
        subject = self._subject([DeclaredMembers("x.A", methods=(second,))], visible=[first])
        [obligation] = ObligationResolver().resolve(subject)
        assert obligation.exceptions == ("java.io.IOException",)
        assert obligation.exception_conflicts == ()

    def test_root_members_are_never_scanned(self):
        hidden = _method("finalize", "java.lang.Object", modifiers=("protected", "abstract"))
        subject = TypeDescriptor(
            qualified_name="x.A",
            simple_name="A",
            package_name="x",
            kind="class",
            modifiers=frozenset({"abstract"}),
            ancestor_chain=(
                DeclaredMembers("x.A"),
                DeclaredMembers("java.lang.Object", methods=(hidden,)),
            ),
            implemented_interfaces=(),
            externally_visible_methods=(),
        )
        assert ObligationResolver().resolve(subject) == []

    def test_nearer_concrete_declaration_counts(self):
        concrete = _method("go", "x.Mid", modifiers=("public",), exceptions=())
        abstract_go = _method("go", "x.Root", exceptions=("java.io.IOException",))
        subject = self._subject([
            DeclaredMembers("x.Sub"),
            DeclaredMembers("x.Mid", methods=(concrete,)),
            DeclaredMembers("x.Root", methods=(abstract_go,)),
        ])
        [obligation] = ObligationResolver().resolve(subject)
        assert obligation.representative is concrete
        assert obligation.exceptions == ()

    def test_concrete_only_signatures_are_not_obligations(self):
        concrete = _method("go", "x.A", modifiers=("public",))
        subject = self._subject([DeclaredMembers("x.A", methods=(concrete,))], visible=[concrete])
        assert ObligationResolver().resolve(subject) == []
