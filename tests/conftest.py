import pytest
import numpy as np


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def sample31():
    # Hosking & Wallis annual maximum series used for the L-moment fits.
    return np.array([
        1953, 1939, 1677, 1692, 2051, 2371, 2022, 1521, 1448, 1825, 1363, 1760, 1672, 1603, 1244, 1521,
        1783, 1560, 1357, 1673, 1625, 1425, 1688, 1577, 1736, 1640, 1584, 1293, 1277, 1742, 1491,
    ], dtype=float)


@pytest.fixture
def harricana():
    # Harricana River annual peak flows (Rao & Hamed, 2000).
    return np.array([
        122, 244, 214, 173, 229, 156, 212, 263, 146, 183, 161, 205, 135, 331, 225, 174, 98.8, 149, 238,
        262, 132, 235, 216, 240, 230, 192, 195, 172, 173, 172, 153, 142, 317, 161, 201, 204, 194, 164,
        183, 161, 167, 179, 185, 117, 192, 337, 125, 166, 99.1, 202, 230, 158, 262, 154, 164, 182, 164,
        183, 171, 250, 184, 205, 237, 177, 239, 187, 180, 173, 174,
    ], dtype=float)


@pytest.fixture
def wind():
    # Annual maximum wind speeds (Hosking, 1997).
    return np.array([
        7.4, 8, 12.6, 11.5, 14.3, 14.9, 8.6, 13.8, 20.1, 8.6, 6.9, 9.7, 9.2, 10.9, 13.2, 11.5, 12, 18.4,
        11.5, 9.7, 9.7, 16.6, 9.7, 12, 16.6, 14.9, 8, 12, 14.9, 5.7, 7.4, 8.6, 9.7, 16.1, 9.2, 8.6, 14.3,
        9.7, 6.9, 13.8, 11.5, 10.9, 9.2, 8, 13.8, 11.5, 14.9, 20.7, 9.2, 11.5, 10.3, 6.3, 1.7, 4.6, 6.3,
        8, 8, 10.3, 11.5, 14.9, 8, 4.1, 9.2, 9.2, 10.9, 4.6, 10.9, 5.1, 6.3, 5.7, 7.4, 8.6, 14.3, 14.9,
        14.9, 14.3, 6.9, 10.3, 6.3, 5.1, 11.5, 6.9, 9.7, 11.5, 8.6, 8, 8.6, 12, 7.4, 7.4, 7.4, 9.2, 6.9,
        13.8, 7.4, 6.9, 7.4, 4.6, 4, 10.3, 8, 8.6, 11.5, 11.5, 11.5, 9.7, 11.5, 10.3, 6.3, 7.4, 10.9,
        10.3, 15.5, 14.3, 12.6, 9.7, 3.4, 8, 5.7, 9.7, 2.3, 6.3, 6.3, 6.9, 5.1, 2.8, 4.6, 7.4, 15.5,
        10.9, 10.3, 10.9, 9.7, 14.9, 15.5, 6.3, 10.9, 11.5, 6.9, 13.8, 10.3, 10.3, 8, 12.6, 9.2, 10.3,
        10.3, 16.6, 6.9, 13.2, 14.3, 8, 11.5,
    ], dtype=float)


@pytest.fixture
def white_river():
    # White River near Nora, Indiana, annual peak flows.
    return np.array([
        23200, 2950, 10300, 23200, 4540, 9960, 10800, 26900, 23300, 20400, 8480, 3150, 9380, 32400,
        20800, 11100, 7270, 9600, 14600, 14300, 22500, 14700, 12700, 9740, 3050, 8830, 12000, 30400,
        27000, 15200, 8040, 11700, 20300, 22700, 30400, 9180, 4870, 14700, 12800, 13700, 7960, 9830,
        12500, 10700, 13200, 14700, 14300, 4050, 14600, 14400, 19200, 7160, 12100, 8650, 10600, 24500,
        14400, 6300, 9560, 15800, 14300, 28700,
    ], dtype=float)


@pytest.fixture
def gumbel_sample():
    return np.array([
        17600, 3660, 903, 5050, 24000, 11400, 9470, 8970, 7710, 14800, 13900, 20800, 9470, 7860, 7860,
        2730, 6480, 18200, 26300, 15100, 14600, 7300, 8580, 15100, 15100, 21800, 6200, 2130, 11100,
        14300, 11200, 6670, 5440, 9370, 6900, 9680, 6810, 7730, 5290, 12200, 9750, 7390, 13100, 7190,
        8850, 6290, 18800, 9740, 2990, 6950, 9390, 12400, 21200,
    ], dtype=float)


@pytest.fixture
def normal_sample():
    return np.array([
        6290, 2700, 13100, 16900, 14600, 9600, 7740, 8490, 8130, 12000, 17200, 15000, 12400, 6960,
        6500, 5840, 10400, 18800, 21400, 22600, 14200, 11000, 12800, 15700, 4740, 6950, 11800, 12100,
        20600, 14600, 14600, 8900, 10600, 14200, 14100, 14100, 12500, 7530, 13400, 17600, 13400, 19200,
        16900, 15500, 14500, 21900, 10400, 7460,
    ], dtype=float)


@pytest.fixture
def weibull_sample():
    return np.array([
        5.85217239831041, 11.7689913217945, 7.92234431846412, 2.38759244506478, 15.5436696441499,
        6.08101380255694, 2.86541835011654, 14.3272883381316, 15.2293040674263, 9.97119823770777,
        15.0078313002315, 7.61635445751015, 15.1579888433448, 1.10494899327883, 5.16175715794861,
        1.57293533830851, 2.63953242550359, 10.2188413398386, 17.9577682621499, 12.4224983994072,
        11.1290575697936, 4.58559057415731, 8.36394145136537, 7.73020853953012, 4.3003409576186,
        13.6952916728348, 5.66874359549936, 3.90607944288712, 6.87181072557784, 6.39556271370504,
        8.34155604676012, 1.29993054120872, 8.10693236597578, 1.69364361593805, 11.2322364035615,
        10.5062782641941, 10.6177306237836, 8.22440512843937, 4.92470777947916, 10.9335442619582,
        9.14151844388434, 10.4858916284884, 18.6061687709787, 11.6935338563956, 13.9506199815183,
        4.17482853658164, 14.7373704498786, 2.36384889353382, 5.44157070547486, 5.96907635426314,
    ], dtype=float)
