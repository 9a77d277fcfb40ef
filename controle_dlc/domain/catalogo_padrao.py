"""
Catálogo padrão de produtos (sementes).

Três listas fixas:
- PRIMARIA_PADRAO: DLC Primária (produtos frescos e refrigerados);
- DLC_NEGATIVA_PROTEINAS_PADRAO: DLC Primária, proteínas congeladas;
- SECUNDARIA_PADRAO: DLC Secundária (validade após abertura / preparo),
  verificada diariamente.

Cada item é um dicionário com ``category``, ``name`` e, opcionalmente,
``subCategory``, ``expiryDate`` e ``observation``.
"""

from typing import Any, Dict, List


PRIMARIA_PADRAO: List[Dict[str, Any]] = [
    {"category": "DLC Positiva", "subCategory": "Frescos", "name": "Tomate Fatiado"},
    {"category": "DLC Positiva", "subCategory": "Frescos", "name": "Cebola Picada"},
    {"category": "DLC Positiva", "subCategory": "Frescos", "name": "Pickles"},
    {"category": "DLC Positiva", "subCategory": "Lacticínios", "name": "Leite Meio-Gordo"},
    {"category": "DLC Positiva", "subCategory": "Lacticínios", "name": "Natas UHT"},
    {"category": "DLC Positiva", "subCategory": "Lacticínios", "name": "Queijo Cheddar Fatiado"},
    {"category": "DLC Positiva", "subCategory": "Lacticínios", "name": "Mix de Gelado"},
    {"category": "DLC Positiva", "subCategory": "Bebidas", "name": "Sumo de Laranja"},
    {"category": "DLC Positiva", "subCategory": "Frescos", "name": "Alface L6",
     "expiryDate": "2025-12-10T18:00", "observation": "Exemplo com subcategoria"},
    {"category": "DLC Positiva", "subCategory": "Congelados", "name": "Batata Frita",
     "expiryDate": "2025-12-20T00:00", "observation": "Outro exemplo"},
]

DLC_NEGATIVA_PROTEINAS_PADRAO: List[Dict[str, Any]] = [
    {"category": "DLC Negativa", "subCategory": "Proteínas", "name": "Carne 10:1"},
    {"category": "DLC Negativa", "subCategory": "Proteínas", "name": "Carne 4:1"},
    {"category": "DLC Negativa", "subCategory": "Proteínas", "name": "Frango Panado"},
    {"category": "DLC Negativa", "subCategory": "Proteínas", "name": "Nuggets"},
    {"category": "DLC Negativa", "subCategory": "Proteínas", "name": "Filete de Peixe"},
    {"category": "DLC Negativa", "subCategory": "Proteínas", "name": "Bacon"},
    {"category": "DLC Negativa", "subCategory": "Proteínas", "name": "Ovo"},
]

SECUNDARIA_PADRAO: List[Dict[str, Any]] = [
    {"category": "McCafé", "name": "Leite Aberto"},
    {"category": "McCafé", "name": "Chantilly"},
    {"category": "McCafé", "name": "Xarope de Caramelo"},
    {"category": "McCafé", "name": "Xarope de Baunilha"},
    {"category": "Queijos", "name": "Queijo Cheddar"},
    {"category": "Queijos", "name": "Queijo Emmental"},
    {"category": "Molhos", "name": "Molho Big Mac"},
    {"category": "Molhos", "name": "Molho Tártaro"},
    {"category": "Molhos", "name": "Ketchup"},
    {"category": "Molhos", "name": "Mostarda"},
    {"category": "Pães", "name": "Pão Regular"},
    {"category": "Pães", "name": "Pão Big Mac"},
    {"category": "Pães", "name": "Tortilha"},
    {"category": "Sobremesas", "name": "Topping de Chocolate"},
    {"category": "Sobremesas", "name": "Topping de Morango"},
    {"category": "Sobremesas", "name": "Bolachas Trituradas"},
    {"category": "Outros", "name": "Alface Ralada"},
    {"category": "Outros", "name": "Cebola Reidratada"},
]
