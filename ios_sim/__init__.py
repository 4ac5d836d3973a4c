# IOS 風ルーター CLI シミュレーション用パッケージ
#
# コマンドツリーは ios_sim.cli.trie、モード別ディスパッチは ios_sim.cli.dispatcher で提供されます。

from .cli.context import CliMode
from .cli.dispatcher import RouterCLI
from .cli.trie import CommandTrie
from .router_core import RouterCore

__all__ = ["CliMode", "CommandTrie", "RouterCLI", "RouterCore"]
