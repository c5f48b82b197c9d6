from kont.reader.parser import Symbol, lex, TokenStream
from kont.reader.syntax import parse_program, to_expression
