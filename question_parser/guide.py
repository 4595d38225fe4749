"""
Format Guide
============
User-facing description of the paste format the parser understands.
Shown by the CLI ``format`` command and ``GET /api/format``.
"""

FORMAT_GUIDE = """\
EXEMPLOS DE FORMATO

MÚLTIPLA ESCOLHA:
De acordo com o art. 2º da Portaria nº 1.435/2025, o Regulamento de Continências tem como finalidade, EXCETO:
a) Estabelecer honras, continências e sinais de respeito aos símbolos nacionais e autoridades
b) Regular normas de apresentação, procedimento, formas de tratamento e precedência
c) Fixar as honras que constituem o Cerimonial Militar
d) Regulamentar procedimentos operacionais de abordagem policial
e) Aplicar-se às situações diárias da vida castrense

Comentários: O Regulamento não trata de procedimentos operacionais, mas sim de continências, honras e cerimonial (art. 2º). Gabarito: D

CERTO/ERRADO:
A Constituição Federal de 1988 estabelece que todos são iguais perante a lei.

Comentários: Correto. Artigo 5º da CF/88.

DICAS:
- Use "Comentários:" ou "Explicação:" no início da linha para explicações
- Inclua "Gabarito: X" nos comentários para múltipla escolha
- Alternativas devem começar com a), b), c), d), e) e ocupar uma única linha
- Para questões com "EXCETO", confira a alternativa marcada antes de salvar
- Na importação em lote, separe as questões com duas linhas em branco"""


def format_guide() -> str:
    return FORMAT_GUIDE
