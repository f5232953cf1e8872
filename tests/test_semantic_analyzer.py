"""
Test suite for the TeachLang semantic analyzer.

Tests cover:
- Declarations, redeclaration and shadowing
- Undeclared and uninitialized variable use
- Assignment compatibility and operand typing
- Scope handling around blocks
- Pure type resolution

Author: xwest
"""

import unittest
from typing import List
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from teachlang.config import FrontendConfig
from teachlang.lexer.tokens import Token, TokenType, SourceLocation
from teachlang.parser.parser import parse_string
from teachlang.parser.ast_nodes import Assign, BinOp, CharLiteral, CompOp, Identifier, VarDecl
from teachlang.analyzer.semantic_analyzer import SemanticAnalyzer, analyze, resolve_type
from teachlang.analyzer.symbol_table import SymbolTable, VarType
from teachlang.analyzer.errors import SemanticErrorKind


class TestSemanticAnalyzer(unittest.TestCase):
    """Test cases for the semantic analyzer."""

    def setUp(self):
        """Set up test fixtures."""
        self.analyzer = SemanticAnalyzer()

    def _analyze_code(self, code: str, config: FrontendConfig = None):
        """Helper to analyze a code snippet."""
        program, syntax_errors = parse_string(code)
        self.assertEqual(syntax_errors, [], f"Unexpected syntax errors: {[str(e) for e in syntax_errors]}")
        if config is not None:
            self.analyzer = SemanticAnalyzer(config=config)
        return self.analyzer.analyze(program)

    def _kinds(self, result) -> List[SemanticErrorKind]:
        return [error.kind for error in result.errors]

    def _assert_clean(self, code: str):
        result = self._analyze_code(code)
        self.assertFalse(result.has_errors(), f"Unexpected errors: {[str(e) for e in result.errors]}")
        return result

    def test_declare_then_use(self):
        """Test the basic declare, assign, use sequence."""
        result = self._assert_clean("int x; x = 5; int y; y = x + 2;")

        for name in ("x", "y"):
            symbol = result.symbol_table.lookup(name)
            self.assertIsNotNone(symbol)
            self.assertEqual(symbol.type, VarType.INT)
            self.assertTrue(symbol.initialized)

    def test_string_assigned_to_int(self):
        result = self._analyze_code('int x; x = "hi";')

        self.assertEqual(self._kinds(result), [SemanticErrorKind.TYPE_MISMATCH])
        error = result.errors[0]
        self.assertIsInstance(error.node, Assign)
        self.assertEqual(error.line, 1)
        self.assertEqual(error.diagnostic.code, "S003")
        self.assertFalse(result.symbol_table.lookup("x").initialized)

    def test_inner_declaration_with_undeclared_condition(self):
        """Test the condition's use is undeclared and the inner declaration is fine."""
        result = self._analyze_code("if (x > 1) { int x; }")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.UNDECLARED_VARIABLE])
        self.assertIsInstance(result.errors[0].node, Identifier)

    def test_inner_declaration_shadows_outer(self):
        self._assert_clean("int x; x = 0; if (x > 1) { int x; }")

    def test_shadowed_variable_has_its_own_type(self):
        self._assert_clean("""
        int x;
        x = 1;
        if (x > 0) {
            float x;
            x = 2.5;
            print x;
        }
        print x;
        """)

    def test_redeclaration_same_scope(self):
        """Test redeclaration is reported once and leaves the original intact."""
        result = self._analyze_code("int x; x = 1; float x;")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.REDECLARED_VARIABLE])
        symbol = result.symbol_table.lookup("x")
        self.assertEqual(symbol.type, VarType.INT)
        self.assertEqual(symbol.line, 1)
        self.assertTrue(symbol.initialized)
        self.assertEqual(len(result.symbol_table), 1)
        self.assertIn("line 1", result.errors[0].diagnostic.help_text)

    def test_redeclaration_inside_block(self):
        result = self._analyze_code("if (1 < 2) { int y; int y; }")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.REDECLARED_VARIABLE])

    def test_assignment_to_undeclared(self):
        result = self._analyze_code("y = 5;")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.UNDECLARED_VARIABLE])

    def test_read_of_undeclared(self):
        result = self._analyze_code("print z;")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.UNDECLARED_VARIABLE])

    def test_undeclared_target_still_checks_value(self):
        result = self._analyze_code("y = z;")

        self.assertEqual(self._kinds(result), [
            SemanticErrorKind.UNDECLARED_VARIABLE,
            SemanticErrorKind.UNDECLARED_VARIABLE,
        ])

    def test_undeclared_suggestion(self):
        result = self._analyze_code("int count; count = 1; print cont;")

        self.assertIn("Did you mean 'count'?", result.errors[0].diagnostic.suggestions)

    def test_uninitialized_in_binary_operation(self):
        """Test reading an unassigned variable is reported once."""
        result = self._analyze_code("int x; int y; y = x + 1;")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.UNINITIALIZED_VARIABLE])
        self.assertFalse(result.symbol_table.lookup("y").initialized)

    def test_uninitialized_in_comparison(self):
        result = self._analyze_code("int a; if (a > 1) { }")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.UNINITIALIZED_VARIABLE])

    def test_uninitialized_self_reference(self):
        result = self._analyze_code("int x; x = x + 1;")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.UNINITIALIZED_VARIABLE])

    def test_assignment_target_is_exempt(self):
        self._assert_clean("int x; x = 1; print x;")

    def test_numeric_widening(self):
        self._assert_clean("float f; f = 1; int i; i = 2.5; f = i; i = f;")

    def test_string_assignment(self):
        self._assert_clean('string s; s = "hello";')

        for value in ("5", "'c'", "1 < 2"):
            with self.subTest(value=value):
                result = self._analyze_code(f"string s; s = {value};")
                self.assertEqual(self._kinds(result), [SemanticErrorKind.TYPE_MISMATCH])

    def test_char_assignment(self):
        self._assert_clean("char c; c = 'a'; char d; d = c;")

        result = self._analyze_code("char c; c = 1;")
        self.assertEqual(self._kinds(result), [SemanticErrorKind.TYPE_MISMATCH])

    def test_long_char_literal_strict(self):
        """Test a multi-character literal is rejected at the literal."""
        result = self._analyze_code("char c; c = 'ab';")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.TYPE_MISMATCH])
        self.assertIsInstance(result.errors[0].node, CharLiteral)

        result = self._analyze_code("print 'ab';")
        self.assertEqual(self._kinds(result), [SemanticErrorKind.TYPE_MISMATCH])

    def test_long_char_literal_legacy(self):
        """Test legacy mode only checks char literal length on assignment."""
        legacy = FrontendConfig(strict_char_literals=False)

        result = self._analyze_code("print 'ab';", legacy)
        self.assertFalse(result.has_errors())

        result = self._analyze_code("char c; c = 'ab';", legacy)
        self.assertEqual(self._kinds(result), [SemanticErrorKind.TYPE_MISMATCH])
        self.assertIsInstance(result.errors[0].node, Assign)

    def test_bool_assignment(self):
        self._assert_clean("bool b; b = 1 < 2;")

        result = self._analyze_code("int i; i = 1 < 2;")
        self.assertEqual(self._kinds(result), [SemanticErrorKind.TYPE_MISMATCH])

    def test_comparison_accepts_any_operands(self):
        self._assert_clean('bool b; b = "a" < 1;')

    def test_string_arithmetic_is_invalid(self):
        """Test string operands are rejected once, without a follow-up mismatch."""
        result = self._analyze_code('string s; s = "a" + "b";')

        self.assertEqual(self._kinds(result), [SemanticErrorKind.INVALID_OPERATION])
        self.assertIsInstance(result.errors[0].node, BinOp)

    def test_mixed_operand_types(self):
        result = self._analyze_code("float f; f = 1 + 2.5;")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.TYPE_MISMATCH])
        self.assertIsInstance(result.errors[0].node, BinOp)

    def test_error_type_is_not_reported_twice(self):
        result = self._analyze_code("int x; x = (1 + 2.5) * 3 - 4;")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.TYPE_MISMATCH])

    def test_factorial_argument(self):
        self._assert_clean("factorial(5); int n; n = 3; factorial(n + 1);")

        result = self._analyze_code("factorial(2.5);")
        self.assertEqual(self._kinds(result), [SemanticErrorKind.TYPE_MISMATCH])

        result = self._analyze_code("factorial(z);")
        self.assertEqual(self._kinds(result), [SemanticErrorKind.UNDECLARED_VARIABLE])

    def test_conditions_need_not_be_bool(self):
        self._assert_clean("int n; n = 3; while (n) { n = n - 1; }")

    def test_repeat_condition_is_outside_block_scope(self):
        result = self._analyze_code("repeat { int k; k = 1; } until k > 0;")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.UNDECLARED_VARIABLE])

    def test_block_variables_do_not_escape(self):
        result = self._analyze_code("while (1 < 2) { int t; } t = 1;")

        self.assertEqual(self._kinds(result), [SemanticErrorKind.UNDECLARED_VARIABLE])

    def test_scopes_balanced_after_errors(self):
        result = self._analyze_code("""
        if (a > 1) {
            while (b) {
                int c;
                c = "oops";
            }
        }
        """)

        self.assertTrue(result.has_errors())
        self.assertEqual(result.symbol_table.current_scope, 0)
        self.assertEqual(len(result.symbol_table), 0)

    def test_errors_are_local(self):
        """Test analysis continues after each error."""
        result = self._analyze_code('y = 1; int x; x = "s"; print q; x = 2; print x;')

        self.assertEqual(self._kinds(result), [
            SemanticErrorKind.UNDECLARED_VARIABLE,
            SemanticErrorKind.TYPE_MISMATCH,
            SemanticErrorKind.UNDECLARED_VARIABLE,
        ])
        self.assertEqual(result.error_count, 3)
        self.assertTrue(result.symbol_table.lookup("x").initialized)

    def test_error_nodes_are_skipped(self):
        program, syntax_errors = parse_string("int ; int x; x = 1;")
        self.assertEqual(len(syntax_errors), 1)

        result = self.analyzer.analyze(program)
        self.assertFalse(result.has_errors())

    def test_unknown_declaration_type(self):
        """Test a declaration whose type token is not a type keyword."""
        loc = SourceLocation("<test>", 1, 1, 0)
        decl = VarDecl(Token(TokenType.IDENTIFIER, "d", loc), Token(TokenType.IDENTIFIER, "double", loc))

        result = self.analyzer.analyze(decl)

        self.assertEqual(self._kinds(result), [SemanticErrorKind.SEMANTIC_ERROR])
        self.assertEqual(result.symbol_table.lookup("d").type, VarType.ERROR)

    def test_long_program(self):
        """Test long programs do not hit the recursion limit."""
        self._assert_clean("int x; x = 0;\n" + "x = x + 1;\n" * 5000)

    def test_long_expression(self):
        """Test long operator chains do not hit the recursion limit."""
        self._assert_clean("int x; x = " + " + ".join(["1"] * 2000) + ";")
        self._assert_clean("bool b; b = " + " * ".join(["2"] * 2000) + " > 1;")

    def test_long_expression_errors_in_source_order(self):
        """Test errors inside a long chain are each reported once, left to right."""
        code = "int x; x = a + " + " + ".join(["1"] * 2000) + " + 1.5 + b;"
        result = self._analyze_code(code)

        self.assertEqual(
            [e.kind for e in result.errors],
            [SemanticErrorKind.UNDECLARED_VARIABLE, SemanticErrorKind.UNDECLARED_VARIABLE]
        )
        self.assertIn("'a'", result.errors[0].message)
        self.assertIn("'b'", result.errors[1].message)

    def test_long_expression_mismatch_reported_once(self):
        code = "int x; x = " + " + ".join(["1"] * 2000) + " + 1.5 + 2 + 3;"
        result = self._analyze_code(code)

        self.assertEqual([e.kind for e in result.errors], [SemanticErrorKind.TYPE_MISMATCH])

    def test_valid_programs(self):
        """Test a range of valid programs produce no errors."""
        programs = [
            "",
            "print 1;",
            "int n; n = 5; factorial(n);",
            "float a; a = 1.5; float b; b = a * 2.0 / 3.;",
            "int i; i = 0; repeat { i = i + 1; print i; } until i == 10;",
            "bool done; done = 1 > 2; if (done) { print \"done\"; }",
            "string s; s = \"x\"; char c; c = 'y'; print s; print c;",
            "int a; a = 1; if (a > 0) { int b; b = a; while (b > 0) { b = b - 1; } }",
        ]
        for code in programs:
            with self.subTest(code=code):
                self._assert_clean(code)

    def test_analyzer_reuse(self):
        """Test each analyze call reports only its own errors."""
        first, _ = parse_string("print z;")
        second, _ = parse_string("print 1;")

        self.assertEqual(self.analyzer.analyze(first).error_count, 1)
        self.assertEqual(self.analyzer.analyze(second).error_count, 0)


class TestAnalyzeFunction(unittest.TestCase):
    """Test cases for the module-level analyze function."""

    def test_returns_error_count(self):
        program, _ = parse_string('int x; x = "hi"; print y;')
        table = SymbolTable()

        self.assertEqual(analyze(program, table), 2)
        self.assertIsNotNone(table.lookup("x"))

    def test_uses_given_table(self):
        table = SymbolTable()
        table.declare("preset", VarType.INT, 0).initialized = True
        program, _ = parse_string("int y; y = preset * 2;")

        self.assertEqual(analyze(program, table), 0)


class TestResolveType(unittest.TestCase):
    """Test cases for pure type resolution."""

    def setUp(self):
        self.table = SymbolTable()
        self.table.declare("i", VarType.INT, 1).initialized = True
        self.table.declare("f", VarType.FLOAT, 2).initialized = True
        self.table.declare("s", VarType.STRING, 3).initialized = True
        self.table.declare("u", VarType.INT, 4)

    def _value(self, expression: str):
        program, errors = parse_string(f"v = {expression};")
        self.assertEqual(errors, [])
        return next(program.statements()).value

    def _resolve(self, expression: str, config: FrontendConfig = None) -> VarType:
        return resolve_type(self._value(expression), self.table, config)

    def test_number_literals(self):
        self.assertEqual(self._resolve("42"), VarType.INT)
        self.assertEqual(self._resolve("4.2"), VarType.FLOAT)
        self.assertEqual(self._resolve("4."), VarType.FLOAT)
        self.assertEqual(self._resolve("99999999999999999999"), VarType.INT)

    def test_text_literals(self):
        self.assertEqual(self._resolve('"text"'), VarType.STRING)
        self.assertEqual(self._resolve("'t'"), VarType.CHAR)
        self.assertEqual(self._resolve("'too long'"), VarType.ERROR)
        self.assertEqual(
            self._resolve("'too long'", FrontendConfig(strict_char_literals=False)),
            VarType.CHAR
        )

    def test_identifiers(self):
        self.assertEqual(self._resolve("i"), VarType.INT)
        self.assertEqual(self._resolve("f"), VarType.FLOAT)
        self.assertEqual(self._resolve("u"), VarType.ERROR)
        self.assertEqual(self._resolve("missing"), VarType.ERROR)

    def test_binary_operations(self):
        self.assertEqual(self._resolve("i + 1"), VarType.INT)
        self.assertEqual(self._resolve("f * 2.0"), VarType.FLOAT)
        self.assertEqual(self._resolve("i + f"), VarType.ERROR)
        self.assertEqual(self._resolve("s + s"), VarType.ERROR)

    def test_long_chains(self):
        self.assertEqual(self._resolve(" + ".join(["i"] * 3000)), VarType.INT)
        self.assertEqual(self._resolve(" - ".join(["f"] * 3000) + " + i"), VarType.ERROR)
        self.assertEqual(self._resolve(" + ".join(["i"] * 3000) + " == 3"), VarType.BOOL)

    def test_comparisons_are_bool(self):
        self.assertEqual(self._resolve("i < f"), VarType.BOOL)
        self.assertEqual(self._resolve("s == 1"), VarType.BOOL)

    def test_resolution_reports_nothing(self):
        """Test resolving leaves the table untouched."""
        before = [(s.name, s.initialized) for s in self.table.symbols()]

        self._resolve("missing + u")

        self.assertEqual([(s.name, s.initialized) for s in self.table.symbols()], before)

    def test_non_expression_nodes(self):
        self.assertEqual(resolve_type(None, self.table), VarType.ERROR)
        program, _ = parse_string("int z;")
        self.assertEqual(resolve_type(next(program.statements()), self.table), VarType.ERROR)


if __name__ == "__main__":
    unittest.main()
