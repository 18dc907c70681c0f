from .jetton import JettonWalletData, JettonMintBody
