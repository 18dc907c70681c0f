from .tlb import TlbError, TlbScheme
from .account import StateInit, TickTock
from .custom import JettonWalletData, JettonMintBody
