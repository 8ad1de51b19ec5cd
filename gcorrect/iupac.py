__all__ = [
    "IUPAC_NUCLEOTIDE_COMPLEMENTS",
    "complement_base",
]

# Complements of standard nucleotides and IUPAC ambiguity codes. S, W and N are their own complements.
IUPAC_NUCLEOTIDE_COMPLEMENTS: dict[str, str] = {
    "A": "T",
    "T": "A",
    "C": "G",
    "G": "C",
    "R": "Y",
    "Y": "R",
    "S": "S",
    "W": "W",
    "K": "M",
    "M": "K",
    "B": "V",
    "V": "B",
    "D": "H",
    "H": "D",
    "N": "N",
}


def complement_base(nuc: str) -> str:
    """
    Complement a single reference base. Lower-case (soft-masked) bases are upper-cased first.
    :param nuc: A nucleotide or IUPAC code.
    :return: The complementary base, or the upper-cased input if it is not a known code.
    """
    nuc = nuc.upper()
    return IUPAC_NUCLEOTIDE_COMPLEMENTS.get(nuc, nuc)
